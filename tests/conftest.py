import pytest

from tablespec.schema import ColumnSpec, SchemaBuilder
from tablespec.settings import _reload_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Every test starts from default settings, without retry delays."""
    for name in ("TABLESPEC_DATABASE_PATH", "TABLESPEC_ECHO_SQL", "TABLESPEC_LOG_LEVEL",
                 "TABLESPEC_MAX_RETRIES", "TABLESPEC_RETRY_DELAY_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TABLESPEC_RETRY_DELAY_SECONDS", "0")
    settings = _reload_settings()
    yield settings
    monkeypatch.undo()
    _reload_settings()


@pytest.fixture
def people_schema():
    return (
        SchemaBuilder()
        .add_column(ColumnSpec(name="id", type="INTEGER", primary_key=True))
        .add_column(ColumnSpec(name="name", type="TEXT", not_null=True))
        .add_column(ColumnSpec(name="age", type="INTEGER", default_value=0))
        .finalize()
    )


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "test.db")
