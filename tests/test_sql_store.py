from sqlmodel import Session

from dealdesk.adapters.sql_store import KeyValueRow, SqlKeyValueStore
from dealdesk.services.underwriting_ledger import UnderwritingLedger


def test_sql_store_get_set_overwrite(tmp_path):
    db = f"sqlite:///{tmp_path}/test.db"
    store = SqlKeyValueStore(db)

    assert store.get("k") is None
    store.set("k", "v1")
    store.set("k", "v2")

    assert SqlKeyValueStore(db).get("k") == "v2"


def test_ledger_survives_restart_on_sqlite(tmp_path):
    db = f"sqlite:///{tmp_path}/test.db"

    ledger = UnderwritingLedger(SqlKeyValueStore(db))
    ledger.update_financials(
        "deal-sql",
        {"revenue": 500_000, "costOfGoodsSold": 200_000, "operatingExpenses": 100_000, "proposedDebtService": 160_000},
    )
    ledger.update_stipulation("deal-sql", "2", "received")

    rec = UnderwritingLedger(SqlKeyValueStore(db)).get("deal-sql")

    assert rec.financials.noi == 200_000
    assert rec.financials.dscr == 1.25
    assert rec.find_stip("2").status == "received"


def test_rows_are_stamped_with_aware_utc_time(tmp_path):
    assert KeyValueRow(key="k", value="v").updated_at.tzinfo is not None

    store = SqlKeyValueStore(f"sqlite:///{tmp_path}/test.db")
    store.set("k", "v1")
    with Session(store.engine) as session:
        first = session.get(KeyValueRow, "k").updated_at

    store.set("k", "v2")
    with Session(store.engine) as session:
        row = session.get(KeyValueRow, "k")

    assert row.value == "v2"
    assert row.updated_at >= first
