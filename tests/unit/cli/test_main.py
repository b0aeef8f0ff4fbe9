from unittest.mock import MagicMock

import pytest

from mrologix.cli import main as cli_main
from mrologix.cli.main import build_parser, main


def test_db_status(monkeypatch):
    mock_check_status = MagicMock()
    monkeypatch.setattr("mrologix.cli.db.operations.check_status", mock_check_status)
    main(["db", "status", "--file", "x.db"])
    mock_check_status.assert_called_once_with("x.db")


def test_db_show_renders_rich_table(monkeypatch, capsys):
    monkeypatch.setattr(
        "mrologix.cli.db.operations.show_tables",
        lambda file_path=None: {"flight_record": [{"name": "tail", "type": "TEXT", "nullable": True}]},
    )
    main(["db", "show"])
    out = capsys.readouterr().out
    assert "flight_record" in out
    assert "tail" in out


def test_api_status(monkeypatch):
    mock_dispatch = MagicMock()
    monkeypatch.setitem(cli_main._DISPATCH, "api", mock_dispatch)
    main(["api", "status"])
    assert mock_dispatch.call_args.args[0].subcommand == "status"


def test_user_create_arguments():
    args = build_parser().parse_args(["user", "create", "lead", "--role", "admin"])
    assert (args.command, args.subcommand, args.username, args.role) == ("user", "create", "lead", "admin")
    assert args.password is None


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
