"""Command-line entry point."""

import json
from unittest.mock import patch

from conftest import FakeTransport, make_response
from idpay_client import GatewayClient
from idpay_client import cli

BASE_ARGS = ["--env-file", "missing.env", "--set", "IDPAY_API_KEY=cli-key"]


def _run(argv, transport, capsys):
    def _client(config, session=None):
        return GatewayClient(config, transport=transport)

    with patch.object(cli, "create_gateway_client", side_effect=_client):
        code = cli.run_cli(argv)
    return code, capsys.readouterr().out


def test_create_prints_payment_link(capsys):
    transport = FakeTransport(make_response(201, {"id": "abc", "link": "https://idpay.ir/p/ws/abc"}))

    code, out = _run(
        BASE_ARGS
        + ["--sandbox", "create", "--order-id", "101", "--amount", "10000", "--callback", "https://shop.example/cb"],
        transport,
        capsys,
    )

    assert code == 0
    assert json.loads(out)["payment_link"] == "https://idpay.ir/p/ws/abc"
    assert transport.calls[0][2]["X-SANDBOX"] == "1"
    assert transport.calls[0][2]["X-API-Key"] == "cli-key"


def test_verify_failure_exits_non_zero(capsys):
    transport = FakeTransport(make_response(403, {"error_code": 12, "message": "api key not found"}))

    code, out = _run(BASE_ARGS + ["verify", "--id", "abc", "--order-id", "101"], transport, capsys)

    assert code == 1
    assert json.loads(out)["kind"] == "api_key_not_found"


def test_unreadable_success_body_exits_non_zero(capsys):
    transport = FakeTransport(make_response(200, "<html>maintenance</html>"))

    code, out = _run(BASE_ARGS + ["verify", "--id", "abc", "--order-id", "101"], transport, capsys)

    assert code == 1
    assert out == ""


def test_list_serialises_dates(capsys, verified_transaction):
    transport = FakeTransport(make_response(200, {"records": [verified_transaction]}))

    code, out = _run(
        BASE_ARGS + ["list", "--status", "100", "--payment-date", "1546288200:1546374600"],
        transport,
        capsys,
    )

    assert code == 0
    payload = json.loads(out)
    assert payload["records"][0]["date"] == 1546288200
    assert transport.calls[0][1]["payment_date"] == {"min": 1546288200, "max": 1546374600}


def test_invalid_amount_is_rejected_before_sending(capsys):
    transport = FakeTransport()

    code, _ = _run(
        BASE_ARGS + ["create", "--order-id", "101", "--amount", "999", "--callback", "https://shop.example/cb"],
        transport,
        capsys,
    )

    assert code == 1
    assert transport.calls == []


def test_missing_api_key(capsys):
    code = cli.run_cli(["--env-file", "missing.env", "--set", "IDPAY_API_KEY=", "inquire", "--id", "a", "--order-id", "b"])

    assert code == 1
