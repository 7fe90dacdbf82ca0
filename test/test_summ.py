"""Tests for the report summarization upload."""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from cli.summ import load_report, request_summary, run_summ
from core.errors import SummError

URL = "https://summ.example.invalid/scan"


def _response(payload, status_error=None):
    response = MagicMock()
    response.json.return_value = payload
    if status_error:
        response.raise_for_status.side_effect = status_error
    return response


def _report_file(tmp_path, name="report_1.json"):
    path = tmp_path / name
    path.write_text(json.dumps({"status": "success", "scannedFiles": [], "features": []}), encoding="utf-8")
    return str(path)


class TestLoadReport:
    def test_missing_file(self, tmp_path):
        with pytest.raises(SummError, match="File not found"):
            load_report(str(tmp_path / "none.json"))

    def test_requires_json_extension(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(SummError, match=".json extension"):
            load_report(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(SummError, match="Failed to read or parse"):
            load_report(str(path))

    def test_loads(self, tmp_path):
        assert load_report(_report_file(tmp_path))["status"] == "success"


class TestRequestSummary:
    def test_returns_download_url(self):
        with patch("cli.summ.requests.post", return_value=_response({"download_url": "https://x/y"})) as post:
            url = request_summary({"status": "success"}, URL, api_key="secret")
        assert url == "https://x/y"
        _, kwargs = post.call_args
        assert kwargs["headers"]["x-api-key"] == "secret"
        assert kwargs["json"] == {"status": "success"}

    def test_no_api_key_header_when_unset(self):
        with patch("cli.summ.requests.post", return_value=_response({"download_url": "u"})) as post:
            request_summary({}, URL)
        assert "x-api-key" not in post.call_args[1]["headers"]

    def test_missing_download_url(self):
        with patch("cli.summ.requests.post", return_value=_response({"other": 1})):
            with pytest.raises(SummError, match="download_url not found"):
                request_summary({}, URL)

    def test_http_error(self):
        error = requests.exceptions.HTTPError("500 Server Error")
        with patch("cli.summ.requests.post", return_value=_response({}, status_error=error)):
            with pytest.raises(SummError, match="Request failed"):
                request_summary({}, URL)

    def test_connection_error(self):
        with patch("cli.summ.requests.post", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(SummError, match="refused"):
                request_summary({}, URL)


class TestRunSumm:
    def test_opens_download_url(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCANO_SUMM_URL", URL)
        with patch("cli.summ.requests.post", return_value=_response({"download_url": "https://x/r"})), patch(
            "cli.summ.webbrowser.open"
        ) as browser:
            assert run_summ(_report_file(tmp_path)) == 0
        browser.assert_called_once_with("https://x/r")

    def test_failure_exit_status(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("SCANO_SUMM_URL", URL)
        assert run_summ(str(tmp_path / "missing.json")) == 1
        assert "File not found" in capsys.readouterr().err
