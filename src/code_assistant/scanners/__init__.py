from code_assistant.scanners.complexity import estimate_complexity, estimate_file_complexity
from code_assistant.scanners.lines import read_failure_finding, read_source, scan_file, scan_text

__all__ = [
    "estimate_complexity",
    "estimate_file_complexity",
    "read_failure_finding",
    "read_source",
    "scan_file",
    "scan_text",
]
