from __future__ import annotations

import json

import pytest

from conftest import connection_records


@pytest.fixture
def quiet_cli(monkeypatch):
    from connstore import cli

    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)
    return cli


def _lines(capsys) -> list:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]


def test_settings_read_environment(monkeypatch):
    from connstore.settings import get_settings

    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    monkeypatch.setenv("SCAN_PAGE_SIZE", "40")
    monkeypatch.setenv("CONNECTIONS_TABLE_NAME", "websocket-connections")
    get_settings.cache_clear()

    s = get_settings()

    assert s.aws_region == "eu-west-1"
    assert s.scan_page_size == 40
    assert s.connections_table_name == "websocket-connections"
    assert s.to_log_safe_dict()["data"]["cursor_token_key_configured"] is False


def test_production_requires_cursor_key(monkeypatch):
    from connstore.settings import get_settings

    monkeypatch.setenv("ENVIRONMENT", "prod")
    get_settings.cache_clear()
    with pytest.raises(RuntimeError, match="CURSOR_TOKEN_KEY"):
        get_settings()

    monkeypatch.setenv("CURSOR_TOKEN_KEY", "s3cret")
    get_settings.cache_clear()
    s = get_settings()
    assert s.is_production is True
    assert "s3cret" not in json.dumps(s.to_log_safe_dict())


def test_page_size_must_be_positive(monkeypatch):
    from pydantic import ValidationError

    from connstore.settings import Settings

    monkeypatch.setenv("SCAN_PAGE_SIZE", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_cli_scan_prints_all_records(quiet_cli, fake_ddb, capsys):
    from connstore.store import ConnectionStore

    fake_ddb.seed("conn", connection_records(3))

    code = quiet_cli.main(["scan", "conn", "--page-size", "2"], store=ConnectionStore(dynamodb_client=fake_ddb))

    assert code == 0
    (records,) = _lines(capsys)
    assert [r["connectionId"] for r in records] == ["c000", "c001", "c002"]
    assert records[0]["seq"] == "0"


def test_cli_scan_pages_can_resume_from_printed_cursor(quiet_cli, fake_ddb, capsys):
    from connstore.store import ConnectionStore

    fake_ddb.seed("conn", connection_records(5))
    store = ConnectionStore(dynamodb_client=fake_ddb)

    assert quiet_cli.main(["scan", "conn", "--page-size", "2", "--pages"], store=store) == 0
    pages = _lines(capsys)
    assert [p["count"] for p in pages] == [2, 2, 1]
    assert pages[-1]["cursor"] is None

    assert quiet_cli.main(["scan", "conn", "--page-size", "2", "--cursor", pages[0]["cursor"]], store=store) == 0
    resumed = _lines(capsys)
    assert [r["connectionId"] for p in resumed for r in p["items"]] == ["c002", "c003", "c004"]


def test_cli_table_defaults_from_settings(quiet_cli, fake_ddb, capsys, monkeypatch):
    from connstore.settings import get_settings
    from connstore.store import ConnectionStore

    monkeypatch.setenv("CONNECTIONS_TABLE_NAME", "conn")
    get_settings.cache_clear()
    fake_ddb.create_table("conn")

    code = quiet_cli.main(["put-connection", "-", "abc"], store=ConnectionStore(dynamodb_client=fake_ddb))

    assert code == 0
    assert _lines(capsys)[0]["ok"] is True
    assert "abc" in fake_ddb.tables["conn"]


def test_cli_reports_point_operation_errors(quiet_cli, fake_sqs, capsys):
    from connstore.store import ConnectionStore

    code = quiet_cli.main(
        ["ack-message", fake_sqs.queue_url, "never-delivered"],
        store=ConnectionStore(sqs_client=fake_sqs),
    )

    assert code == 1
    (out,) = _lines(capsys)
    assert out["ok"] is False
    assert out["type"] == "InvalidReceiptHandleError"


def test_cli_reports_scan_failures(quiet_cli, fake_ddb, capsys):
    from connstore.store import ConnectionStore

    code = quiet_cli.main(["scan", "missing"], store=ConnectionStore(dynamodb_client=fake_ddb))

    assert code == 1
    (out,) = _lines(capsys)
    assert out["type"] == "ScanAggregationError"
