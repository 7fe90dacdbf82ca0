"""
Style and markup feature detection.

No parse tree is available, so the whole file is lowercased and every line
is tested against every indexed keyword.
"""

from typing import List

from core.context import DetectionRecord, ScanResult, dedupe_records
from core.utils import debug
from registry.keywords import KeywordIndex

STYLE_EXTENSIONS = (".css", ".html")


def detect_style_features(file_path: str, content: str, index: KeywordIndex) -> ScanResult:
    records: List[DetectionRecord] = []
    if not content:
        return ScanResult(file_path)

    matchers = index.line_matchers()
    for line_num, line in enumerate(content.lower().split("\n"), start=1):
        for keyword, feature_id, matches in matchers:
            if matches(line):
                records.append(DetectionRecord(feature_id, keyword, file_path, line_num))

    records = dedupe_records(records)
    debug(f"{file_path}: {len(records)} style/markup detection(s)")
    return ScanResult(file_path, records=records)
