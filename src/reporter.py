"""
Report aggregation: console summary, JSON report and plaintext run log.

Detection records are grouped by feature id in first-seen order, and each
group is joined with its support verdict. The run fails (exit status 1) when
any detected feature lacks support in some environment.
"""

import json
import os
from typing import Any, Dict, List, Optional

from core.context import DetectionRecord, ScanContext
from core.utils import error, strip_ansi
from registry.loader import FeatureRegistry
from registry.support import SupportVerdict, resolve_support
from templates import render


_USE_COLOR = not os.environ.get("SCANO_NO_COLORS")


class _C:
    """ANSI color codes."""

    RESET = "\033[0m" if _USE_COLOR else ""
    BOLD = "\033[1m" if _USE_COLOR else ""
    DIM = "\033[2m" if _USE_COLOR else ""
    # Colors
    RED = "\033[31m" if _USE_COLOR else ""
    GREEN = "\033[32m" if _USE_COLOR else ""
    YELLOW = "\033[33m" if _USE_COLOR else ""
    CYAN = "\033[36m" if _USE_COLOR else ""


def group_records(records: List[DetectionRecord]) -> Dict[Optional[str], List[DetectionRecord]]:
    """Group records by feature id, keeping first-seen group order."""
    groups: Dict[Optional[str], List[DetectionRecord]] = {}
    for record in records:
        groups.setdefault(record.feature_id, []).append(record)
    return groups


def feature_entry(feature_id: Optional[str], verdict: SupportVerdict, records: List[DetectionRecord]) -> Dict[str, Any]:
    return {
        "featureId": feature_id,
        "title": verdict.title,
        "supported": verdict.supported,
        "unsupported": verdict.unsupported,
        "versions": verdict.versions,
        "occurrences": [r.to_occurrence() for r in records],
    }


def build_report(
    status: str,
    scanned_files: List[str],
    features: List[Dict[str, Any]],
    error_message: Optional[str] = None,
) -> Dict[str, Any]:
    report: Dict[str, Any] = {"status": status}
    if error_message is not None:
        report["error"] = error_message
    report["scannedFiles"] = scanned_files
    report["features"] = features
    return report


def write_report(ctx: ScanContext, report: Dict[str, Any]) -> None:
    os.makedirs(ctx.output_dir, exist_ok=True)
    with open(ctx.report_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)


def write_log(ctx: ScanContext) -> None:
    os.makedirs(ctx.output_dir, exist_ok=True)
    with open(ctx.log_path, "w", encoding="utf-8") as f:
        f.write(strip_ansi(ctx.transcript_text()))


def report_no_files(ctx: ScanContext) -> int:
    ctx.echo(f"{_C.YELLOW}⚠️  No .js, .css, or .html files found.{_C.RESET}")
    ctx.echo(f"📄 Empty report written to: {_C.CYAN}{ctx.report_path}{_C.RESET}")
    write_report(ctx, build_report("success", [], []))
    write_log(ctx)
    return 0


def report_no_detections(ctx: ScanContext) -> int:
    ctx.echo(f"\n{_C.GREEN}✅ No modern web features detected.{_C.RESET}")
    ctx.echo(f"\n📄 Log written to: {_C.CYAN}{ctx.log_path}{_C.RESET}")
    ctx.echo(f"📄 Empty report written to: {_C.CYAN}{ctx.report_path}{_C.RESET}\n")
    write_report(ctx, build_report("success", ctx.scanned_files, []))
    write_log(ctx)
    return 0


def report_features(ctx: ScanContext, registry: FeatureRegistry) -> int:
    """
    Aggregate ctx's detections into the console summary and output files.

    Returns: process exit status, 1 if any detected feature is unsupported
    """
    records = ctx.records
    if not records:
        return report_no_detections(ctx)

    ctx.echo(f"{_C.BOLD}\n🔍 Feature Scan Report:\n{_C.RESET}")

    features: List[Dict[str, Any]] = []
    has_unsafe = False

    for feature_id, group in group_records(records).items():
        verdict = resolve_support(registry, feature_id, warn=ctx.warn)
        if not verdict.supported:
            has_unsafe = True

        block = render(
            "feature.j2",
            C=_C,
            icon="✅" if verdict.supported else "❌",
            color=_C.GREEN if verdict.supported else _C.RED,
            feature_id=feature_id,
            verdict=verdict,
            records=group,
        )
        for line in block.splitlines():
            ctx.echo(line)

        features.append(feature_entry(feature_id, verdict, group))

    if has_unsafe:
        ctx.echo(f"{_C.BOLD}{_C.RED}❗ Some features are not safe to use.{_C.RESET}")
    else:
        ctx.echo(f"{_C.BOLD}{_C.GREEN}✅ All detected features are safe.{_C.RESET}")

    ctx.echo(f"\n📄 Log written to: {_C.CYAN}{ctx.log_path}{_C.RESET}")
    ctx.echo(f"📄 Report written to: {_C.CYAN}{ctx.report_path}{_C.RESET}\n")

    write_report(ctx, build_report("success", ctx.scanned_files, features))
    write_log(ctx)

    return 1 if has_unsafe else 0


def report_fatal(ctx: ScanContext, exc: BaseException) -> int:
    """Report a fatal error and write whatever log/report state exists."""
    message = str(exc) or exc.__class__.__name__
    ctx.fatal(f"{_C.RED}💥 Fatal error: {message}{_C.RESET}")
    try:
        write_log(ctx)
        write_report(ctx, build_report("error", ctx.scanned_files, [], error_message=message))
    except OSError as e:
        error(f"❌ Failed to write logs: {e}")
    return 1
