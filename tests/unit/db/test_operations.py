from mrologix.db import operations


def test_initialize_and_show_tables(tmp_path):
    db_file = tmp_path / "ops.db"
    uri = operations.initialize(str(db_file))
    assert uri.endswith("ops.db")

    tables = operations.show_tables(str(db_file))
    assert "flight_record" in tables
    assert any(column["name"] == "tail" for column in tables["flight_record"])


def test_check_status_returns_sqlite_version(tmp_path):
    version = operations.check_status(str(tmp_path / "status.db"))
    assert version and version[0].isdigit()
