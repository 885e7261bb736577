import json

import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.services.client import MessageMediaClient

runner = CliRunner()


@pytest.fixture
def cli_api(monkeypatch, settings, fake_api):
    def build_client(_settings=None):
        return MessageMediaClient(settings, transport=httpx.MockTransport(fake_api.handler))

    monkeypatch.setattr(cli_main, "build_client", build_client)
    return fake_api


def test_check_replies_json(cli_api):
    ids = cli_api.add_replies(2)

    result = runner.invoke(cli_main.app, ["check-replies", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [r["reply_id"] for r in payload["replies"]] == ids


def test_check_reports_table(cli_api):
    cli_api.add_delivery_reports(1)

    result = runner.invoke(cli_main.app, ["check-reports"])

    assert result.exit_code == 0, result.output
    assert "Delivery Reports (1)" in result.output


def test_check_reports_exports_json(cli_api, tmp_path):
    ids = cli_api.add_delivery_reports(2)
    output = tmp_path / "reports.json"

    result = runner.invoke(cli_main.app, ["check-reports", "--output", str(output)])

    assert result.exit_code == 0, result.output
    exported = json.loads(output.read_text(encoding="utf-8"))
    assert [r["delivery_report_id"] for r in exported["delivery_reports"]] == ids


def test_confirm_reports(cli_api):
    ids = cli_api.add_delivery_reports(2)

    result = runner.invoke(cli_main.app, ["confirm-reports", *ids])

    assert result.exit_code == 0, result.output
    assert "HTTP 202" in result.output
    assert cli_api.delivery_reports == {}


def test_confirm_replies_rejects_more_than_100_ids(cli_api):
    ids = [str(n) for n in range(101)]

    result = runner.invoke(cli_main.app, ["confirm-replies", *ids])

    assert result.exit_code != 0
    assert cli_api.requests == []


def test_invalid_account_exits_with_error(cli_api):
    result = runner.invoke(cli_main.app, ["check-replies", "--account", "INVALID ACCOUNT"])

    assert result.exit_code == 1
    assert "Invalid account 'INVALID ACCOUNT' in header Account" in result.output


def test_send_and_status(cli_api):
    result = runner.invoke(
        cli_main.app,
        ["send", "--to", "+61491570156", "--content", "Hello", "--json"],
    )

    assert result.exit_code == 0, result.output
    message_id = json.loads(result.output)["messages"][0]["message_id"]

    status = runner.invoke(cli_main.app, ["status", message_id, "--json"])
    assert status.exit_code == 0, status.output
    assert json.loads(status.output)["status"] == "queued"


def test_status_not_found(cli_api):
    result = runner.invoke(cli_main.app, ["status", "missing"])

    assert result.exit_code == 1
    assert "Resource not found" in result.output


def test_unknown_log_level_is_a_usage_error(cli_api):
    result = runner.invoke(cli_main.app, ["--log-level", "foo", "check-replies"])

    assert result.exit_code == 2
    assert cli_api.requests == []


def test_log_level_is_case_insensitive(cli_api):
    result = runner.invoke(cli_main.app, ["--log-level", "debug", "check-replies", "--json"])

    assert result.exit_code == 0, result.output
