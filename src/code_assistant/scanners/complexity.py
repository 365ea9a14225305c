from __future__ import annotations

import re
from pathlib import Path

from code_assistant.scanners.lines import read_source

BASE_SCORE = 1
MAX_SCORE = 100

CONDITIONAL_PATTERNS = (
    re.compile(r"if\s*\("),
    re.compile(r"else"),
    re.compile(r"switch\s*\("),
    re.compile(r"case\s+"),
    re.compile(r"\?\s*.*:"),
)

LOOP_PATTERNS = (
    re.compile(r"for\s*[(\s]"),
    re.compile(r"while\s*\("),
    re.compile(r"do\s*\{"),
    re.compile(r"\.forEach"),
    re.compile(r"\.map"),
)


def estimate_complexity(text: str) -> int:
    """Token-count approximation of cyclomatic complexity, clamped to 1..100."""
    branches = 0
    for line in text.split("\n"):
        if not line.strip():
            continue
        for pattern in CONDITIONAL_PATTERNS:
            branches += len(pattern.findall(line))
        for pattern in LOOP_PATTERNS:
            branches += len(pattern.findall(line))
    return min(MAX_SCORE, BASE_SCORE + branches)


def estimate_file_complexity(path: str | Path) -> int:
    try:
        text = read_source(path)
    except (UnicodeDecodeError, OSError):
        return BASE_SCORE
    return estimate_complexity(text)
