# src/dealdesk/domain/ports.py
from __future__ import annotations

from typing import Protocol


# ----------------------------
# Durable key-value storage
# ----------------------------

class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...
