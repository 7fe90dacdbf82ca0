"""
Report summarization: upload a scan report and open the rendered summary.

The endpoint is configured through SCANO_SUMM_URL; SCANO_SUMM_API_KEY, when
set, is sent as the x-api-key header. The service answers with a JSON object
holding a download_url.
"""

import json
import os
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from core.errors import SummError
from core.utils import error, info

SUMM_TIMEOUT = 60


def load_report(report_path: str) -> Dict[str, Any]:
    path = Path(report_path).resolve()
    if not path.exists():
        raise SummError(f"File not found: {path}")
    if path.suffix.lower() != ".json":
        raise SummError("The file must have a .json extension.")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SummError(f"Failed to read or parse the JSON file: {e}") from e


def request_summary(report: Dict[str, Any], url: str, api_key: Optional[str] = None) -> str:
    """POST a report to the summarization endpoint and return its download URL."""
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["x-api-key"] = api_key

    try:
        response = requests.post(url, headers=headers, json=report, timeout=SUMM_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        raise SummError(f"Request failed: {e}") from e
    except ValueError as e:
        raise SummError(f"Request failed: invalid JSON response: {e}") from e

    download_url = data.get("download_url") if isinstance(data, dict) else None
    if not download_url:
        raise SummError("download_url not found in the response.")
    return download_url


def run_summ(report_path: str) -> int:
    """Entry point of `scano summ <report.json>`."""
    try:
        report = load_report(report_path)
        download_url = request_summary(
            report,
            os.environ["SCANO_SUMM_URL"],
            os.environ.get("SCANO_SUMM_API_KEY"),
        )
    except SummError as e:
        error(str(e))
        return 1

    info(f"Opening the report: {download_url}")
    webbrowser.open(download_url)
    return 0
