"""
Per-run scan context: console transcript, detection set and output paths.

One ScanContext is built per run and passed explicitly to the pipeline,
the detectors' caller and the reporter.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from core.utils import run_timestamp, warn


@dataclass(frozen=True)
class DetectionRecord:
    """One observed occurrence of a feature-indicating token."""

    feature_id: Optional[str]
    keyword: str
    file: str
    line: int

    def to_occurrence(self) -> Dict:
        return {"file": self.file, "line": self.line, "keyword": self.keyword}


@dataclass
class ScanResult:
    """Outcome of scanning a single file."""

    path: str
    records: List[DetectionRecord] = field(default_factory=list)
    error: Optional[str] = None  # Parse diagnostic; records are empty when set

    @property
    def ok(self) -> bool:
        return self.error is None


def dedupe_records(records: Iterable[DetectionRecord]) -> List[DetectionRecord]:
    """Drop repeated (feature_id, keyword, file, line) tuples, keeping first-seen order."""
    return list(dict.fromkeys(records))


class ScanContext:
    """
    Mutable state of one scan run.

    Everything printed through echo()/warn() is kept in the transcript that
    later becomes the plaintext run log.
    """

    def __init__(self, output_dir: str = ".", timestamp: Optional[str] = None):
        self.timestamp = timestamp or run_timestamp()
        self.output_dir = output_dir
        self.log_path = os.path.join(output_dir, f"scano_log_{self.timestamp}.log")
        self.report_path = os.path.join(output_dir, f"report_{self.timestamp}.json")
        self.scanned_files: List[str] = []
        self.transcript: List[str] = []
        # dict used as an insertion-ordered set
        self._detections: Dict[DetectionRecord, None] = {}

    def echo(self, message: str = "") -> None:
        print(message)
        self.transcript.append(message)

    def warn(self, message: str) -> None:
        warn(message)
        self.transcript.append(message)

    def fatal(self, message: str) -> None:
        print(message, file=sys.stderr)
        self.transcript.append(message)

    def add_records(self, records: Iterable[DetectionRecord]) -> None:
        for record in records:
            self._detections.setdefault(record, None)

    @property
    def records(self) -> List[DetectionRecord]:
        return list(self._detections)

    def transcript_text(self) -> str:
        return "".join(line + "\n" for line in self.transcript)
