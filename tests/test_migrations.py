import importlib.util
from pathlib import Path

import sqlalchemy as sa

VERSIONS = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def load_revision(filename):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_backfill_counts_only_updated_rows():
    revision = load_revision("002_structured_visa_duration.py")
    engine = sa.create_engine("sqlite://")
    metadata = sa.MetaData()
    table = sa.Table(
        "visa_types", metadata,
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("duration", sa.String),
        sa.Column("duration_value", sa.Integer),
        sa.Column("duration_unit", sa.String),
    )
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(table.insert(), [
            {"id": "work", "duration": "90 days"},
            {"id": "residence", "duration": "1 year"},
            {"id": "blank", "duration": ""},
            {"id": "unset", "duration": None},
            {"id": "vague", "duration": "as needed"},
        ])
        assert revision.backfill_durations(conn) == (2, 1)

        rows = {row.id: (row.duration_value, row.duration_unit) for row in conn.execute(sa.select(table))}

    assert rows["work"] == (90, "DAYS")
    assert rows["residence"] == (1, "YEARS")
    assert rows["blank"] == (None, None)
    assert rows["vague"] == (None, None)
