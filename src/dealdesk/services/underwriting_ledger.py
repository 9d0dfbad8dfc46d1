# src/dealdesk/services/underwriting_ledger.py
from __future__ import annotations

import json
from typing import Any, Iterable, Literal, Mapping

from pydantic import ValidationError

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.domain.errors import InvalidInputError, StorageError
from dealdesk.domain.ports import KeyValueStore
from dealdesk.domain.underwriting import (
    MAX_RISK_RATING,
    MIN_RISK_RATING,
    STIP_STATUSES,
    FinancialsUpdate,
    Stipulation,
    UnderwritingRecord,
    new_record,
)

logger = get_logger(__name__)

DEFAULT_STORE_KEY = "leads_uw_analyses"

Action = Literal["created", "existing"]


class UnderwritingLedger:
    """
    Per-deal underwriting records, persisted as ONE serialized mapping
    (deal id -> record) under a single key of a key-value store.

    Persistence model:
      - the whole mapping is read once, at construction
      - every mutating call rewrites the whole mapping (no partial writes)
      - the write happens before the in-memory copy is swapped, so a failed
        write raises StorageError and leaves the ledger as it was
      - no locking: two writers on the same deal -> last write wins

    Records are frozen; each mutation swaps in a new record, so always use
    the one returned by the call.

    The full rewrite makes each save O(number of deals). Fine for a single
    desk, not for thousands of open deals.
    """

    def __init__(self, store: KeyValueStore, store_key: str = DEFAULT_STORE_KEY):
        self._store = store
        self._key = store_key
        self._records: dict[str, UnderwritingRecord] = self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _load(self) -> dict[str, UnderwritingRecord]:
        raw = self._store.get(self._key)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
            records = {
                str(deal_id): UnderwritingRecord.model_validate(payload)
                for deal_id, payload in data.items()
            }
        except (ValueError, AttributeError, ValidationError) as e:
            raise StorageError(f"persisted underwriting mapping under {self._key!r} is unreadable: {e}") from e

        logger.info(
            "underwriting ledger loaded",
            extra={"context": {"store_key": self._key, "deals": len(records)}},
        )
        return records

    def _commit(self, record: UnderwritingRecord) -> UnderwritingRecord:
        staged = dict(self._records)
        staged[record.deal_id] = record
        payload = json.dumps({deal_id: r.to_payload() for deal_id, r in staged.items()})
        try:
            self._store.set(self._key, payload)
        except StorageError:
            logger.error(
                "underwriting save failed; change not saved",
                extra={"context": {"deal_id": record.deal_id, "store_key": self._key}},
            )
            raise
        self._records = staged
        return record

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, deal_id: Any) -> UnderwritingRecord | None:
        """Pure read; never creates a record."""
        return self._records.get(str(deal_id))

    def get_or_create_with_status(self, deal_id: Any) -> tuple[UnderwritingRecord, Action]:
        """
        Returns: (record, action) where action is "created" or "existing"
        """
        key = str(deal_id)
        existing = self._records.get(key)
        if existing is not None:
            return existing, "existing"

        record = self._commit(new_record(key))
        logger.info("underwriting record created", extra={"context": {"deal_id": key}})
        return record, "created"

    def get_or_create(self, deal_id: Any) -> UnderwritingRecord:
        record, _ = self.get_or_create_with_status(deal_id)
        return record

    def outstanding_stipulations(self, deal_id: Any) -> list[Stipulation]:
        record = self.get_or_create(deal_id)
        return [s for s in record.stips if s.status == "outstanding"]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def update_financials(
        self,
        deal_id: Any,
        update: FinancialsUpdate | Mapping[str, float],
    ) -> UnderwritingRecord:
        if not isinstance(update, FinancialsUpdate):
            try:
                update = FinancialsUpdate.model_validate(dict(update))
            except ValidationError as e:
                raise InvalidInputError(f"invalid financials update: {e}") from e

        record = self.get_or_create(deal_id)
        financials = record.financials.model_copy(update=update.changes())
        updated = self._commit(record.model_copy(update={"financials": financials}))

        logger.info(
            "financials updated",
            extra={
                "context": {
                    "deal_id": updated.deal_id,
                    "fields": sorted(update.changes()),
                    "noi": financials.noi,
                    "dscr": financials.dscr,
                }
            },
        )
        return updated

    def update_stipulation(self, deal_id: Any, stip_id: str, status: str) -> UnderwritingRecord:
        """
        Any transition is allowed, including back to "outstanding".
        An unknown stip_id is a no-op: nothing is saved and the record comes
        back unchanged.
        """
        if status not in STIP_STATUSES:
            raise InvalidInputError(f"status must be one of {', '.join(STIP_STATUSES)} (got {status!r})")

        record = self.get_or_create(deal_id)
        if record.find_stip(str(stip_id)) is None:
            logger.warning(
                "unknown stipulation id; nothing updated",
                extra={"context": {"deal_id": record.deal_id, "stip_id": stip_id}},
            )
            return record

        stips = tuple(
            s.model_copy(update={"status": status}) if s.id == str(stip_id) else s
            for s in record.stips
        )
        return self._commit(record.model_copy(update={"stips": stips}))

    def update_risk_rating(
        self,
        deal_id: Any,
        rating: int,
        strengths: Iterable[str] | None = None,
        weaknesses: Iterable[str] | None = None,
    ) -> UnderwritingRecord:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidInputError(f"risk rating must be an integer (got {rating!r})")
        if not MIN_RISK_RATING <= rating <= MAX_RISK_RATING:
            raise InvalidInputError(
                f"risk rating must be between {MIN_RISK_RATING} and {MAX_RISK_RATING} (got {rating})"
            )

        record = self.get_or_create(deal_id)
        changes: dict[str, Any] = {"risk_rating": rating}
        # supplied lists replace the old ones wholesale
        if strengths is not None:
            changes["strengths"] = tuple(strengths)
        if weaknesses is not None:
            changes["weaknesses"] = tuple(weaknesses)

        return self._commit(record.model_copy(update=changes))

    def update_memo(self, deal_id: Any, text: str) -> UnderwritingRecord:
        record = self.get_or_create(deal_id)
        return self._commit(record.model_copy(update={"memo_draft": text or ""}))
