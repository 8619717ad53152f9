"""
Command-line driver tests.

Exercises exit statuses and console output through main(), with the
HTTP layer replaced by httpx.MockTransport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from verifier.app.core.config import get_settings
from verifier.app.main import (
    EXIT_FAILURE,
    EXIT_INVALID_SIGNATURE,
    EXIT_NO_SIGNATURES,
    EXIT_OK,
    EXIT_USAGE,
    main,
)

from verifier.tests.fixtures.reports import (
    nested_report,
    root_report,
    signature_entry,
    two_signature_report,
)

_ENDPOINT = "http://dss.test/services/rest/validation/validateSignature"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    for name in (
        "VERIFIER_DSS_VALIDATION_URL",
        "VERIFIER_REQUEST_TIMEOUT_SECONDS",
        "VERIFIER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("VERIFIER_DSS_VALIDATION_URL", _ENDPOINT)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def signed_pdf(tmp_path):
    path = tmp_path / "contract.pdf"
    path.write_bytes(b"%PDF-1.7 signed")
    return path


def _transport(report=None, status=200, body=None, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if body is not None:
            return httpx.Response(status, content=body.encode())
        return httpx.Response(status, json=report)

    return httpx.MockTransport(handler)


def test_missing_argument_prints_usage_and_sends_nothing(capsys):
    calls = []

    status = main([], transport=_transport({}, calls=calls))

    assert status == EXIT_USAGE
    assert calls == []
    assert "usage:" in capsys.readouterr().err


def test_invalid_timeout_is_a_usage_error(signed_pdf, capsys):
    status = main([str(signed_pdf), "--timeout", "0"])

    assert status == EXIT_USAGE
    assert "greater than zero" in capsys.readouterr().err


def test_all_valid_exits_zero(signed_pdf, capsys):
    calls = []
    report = root_report([signature_entry()])

    status = main([str(signed_pdf)], transport=_transport(report, calls=calls))

    out = capsys.readouterr().out
    assert status == EXIT_OK
    assert str(calls[0].url) == _ENDPOINT
    assert "Signature #1:" in out
    assert "Signed By: Jane Signer" in out
    assert "Status: VALID (TOTAL_PASSED)" in out
    assert "Reason:" not in out


def test_invalid_signature_reports_reason(signed_pdf, capsys):
    status = main([str(signed_pdf)], transport=_transport(two_signature_report()))

    out = capsys.readouterr().out
    assert status == EXIT_INVALID_SIGNATURE
    assert out.index("Signature #1:") < out.index("Signature #2:")
    assert "Status: INVALID (INDETERMINATE)" in out
    assert "Reason: REVOKED" in out


def test_no_signatures_has_its_own_message_and_status(signed_pdf, capsys):
    status = main([str(signed_pdf)], transport=_transport(nested_report([])))

    out = capsys.readouterr().out
    assert status == EXIT_NO_SIGNATURES
    assert "No signatures found in the document." in out
    assert "Signature #" not in out


def test_json_output(signed_pdf, capsys):
    status = main(
        [str(signed_pdf), "--json"],
        transport=_transport(two_signature_report()),
    )

    payload = json.loads(capsys.readouterr().out)
    assert status == EXIT_INVALID_SIGNATURE
    assert payload["status"] == "signatures_evaluated"
    assert [v["reason"] for v in payload["verdicts"]] == [None, "REVOKED"]


def test_endpoint_flag_overrides_settings(signed_pdf):
    calls = []
    other = "http://other.test/validateSignature"

    main(
        [str(signed_pdf), "--endpoint", other],
        transport=_transport(nested_report([]), calls=calls),
    )

    assert str(calls[0].url) == other


def test_missing_file_fails_without_network(tmp_path, capsys):
    calls = []

    status = main(
        [str(tmp_path / "missing.pdf")],
        transport=_transport({}, calls=calls),
    )

    assert status == EXIT_FAILURE
    assert calls == []
    assert "Cannot read file" in capsys.readouterr().err


def test_service_error_body_is_printed_verbatim(signed_pdf, capsys):
    status = main(
        [str(signed_pdf)],
        transport=_transport(status=500, body='{"error":"bad request"}'),
    )

    err = capsys.readouterr().err
    assert status == EXIT_FAILURE
    assert "API Error: 500 Internal Server Error" in err
    assert '{"error":"bad request"}' in err
    assert _ENDPOINT in err


def test_unreachable_service_gives_guidance(signed_pdf, capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    status = main([str(signed_pdf)], transport=httpx.MockTransport(handler))

    err = capsys.readouterr().err
    assert status == EXIT_FAILURE
    assert "Connection Failed!" in err
    assert "Could not connect to validation service" in err
    assert "running" in err


def test_invalid_configuration_fails(signed_pdf, monkeypatch, capsys):
    monkeypatch.setenv("VERIFIER_DSS_VALIDATION_URL", "not a url")
    get_settings.cache_clear()

    status = main([str(signed_pdf)])

    assert status == EXIT_FAILURE
    assert "Invalid configuration" in capsys.readouterr().err
