from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from code_assistant.languages import detect_language
from code_assistant.models import (
    KIND_POTENTIAL_BUG,
    KIND_SECRET,
    SEVERITY_LOW,
    AnalysisSettings,
    FileReport,
    Finding,
)
from code_assistant.scanners import estimate_complexity, read_failure_finding, read_source, scan_text
from code_assistant.scanners.patterns import TODO_RULE_CODES
from code_assistant.walker import list_candidate_files

_LOG = logging.getLogger(__name__)

SPLIT_MODULES_THRESHOLD = 20
REFACTOR_THRESHOLD = 50
TODO_THRESHOLD = 3
LINTED_LANGUAGES = frozenset({"javascript", "typescript"})

OVERSIZE_SUGGESTION = "File is too large - consider refactoring into smaller files"


class AnalysisError(ValueError):
    pass


class FileAnalyzer:
    """Runs the line scanner and complexity estimate over files.

    Settings are passed in explicitly; the analyzer keeps no other state, so one
    instance can be shared across threads.
    """

    def __init__(self, settings: AnalysisSettings | None = None):
        self.settings = settings or AnalysisSettings()

    def analyze_path(
        self,
        target: str | Path,
        *,
        recursive: bool = False,
        include_hidden: bool = False,
        max_files: int | None = None,
        jobs: int = 1,
    ) -> list[FileReport]:
        root = Path(target)
        if not root.exists():
            raise AnalysisError(f"Path does not exist: {target}")

        if not root.is_dir():
            return [self.analyze_file(root)]

        files = list_candidate_files(
            root,
            recursive=recursive,
            include_hidden=include_hidden,
            max_files=max_files,
        )
        _LOG.info("Analyzing %d files under %s", len(files), root)

        if jobs > 1 and len(files) > 1:
            return self._analyze_parallel(files, jobs)

        reports: list[FileReport] = []
        for path in files:
            report = self._analyze_or_skip(path)
            if report is not None:
                reports.append(report)
        return reports

    def analyze_file(self, path: str | Path) -> FileReport:
        file_path = Path(path)
        language = detect_language(file_path)

        try:
            size = file_path.stat().st_size
        except OSError as exc:
            return _unreadable_report(file_path, language, 0, exc)

        if size > self.settings.max_file_size:
            return _oversize_report(file_path, language, size)

        scan_secrets = self.settings.enable_secret_detection
        score_complexity = self.settings.enable_complexity_analysis
        if not (scan_secrets or score_complexity):
            return FileReport(
                path=str(file_path),
                language=language,
                size=size,
                complexity=0,
                suggestions=tuple(build_suggestions([], 0, language)),
            )

        try:
            text = read_source(file_path)
        except (UnicodeDecodeError, OSError) as exc:
            return _unreadable_report(file_path, language, size, exc)

        findings = scan_text(text, str(file_path)) if scan_secrets else []
        complexity = estimate_complexity(text) if score_complexity else 0

        return FileReport(
            path=str(file_path),
            language=language,
            size=size,
            complexity=complexity,
            findings=tuple(findings),
            suggestions=tuple(build_suggestions(findings, complexity, language)),
        )

    def _analyze_or_skip(self, path: Path) -> FileReport | None:
        try:
            return self.analyze_file(path)
        except Exception as exc:
            _LOG.warning("Failed to analyze %s: %s", path, exc)
            return None

    def _analyze_parallel(self, files: list[Path], jobs: int) -> list[FileReport]:
        slots: list[FileReport | None] = [None] * len(files)
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            futures = {pool.submit(self._analyze_or_skip, path): index for index, path in enumerate(files)}
            for future in as_completed(futures):
                slots[futures[future]] = future.result()
        return [report for report in slots if report is not None]


def build_suggestions(findings: list[Finding], complexity: int, language: str) -> list[str]:
    suggestions: list[str] = []

    if complexity > SPLIT_MODULES_THRESHOLD:
        suggestions.append("Consider breaking this file into smaller, more focused modules")

    if complexity > REFACTOR_THRESHOLD:
        suggestions.append("High complexity detected - refactoring recommended")

    if any(item.kind == KIND_SECRET for item in findings):
        suggestions.append("Move sensitive data to environment variables or secure config files")

    todo_count = sum(1 for item in findings if item.rule_code in TODO_RULE_CODES)
    if todo_count > TODO_THRESHOLD:
        suggestions.append("Consider addressing TODO comments or creating issues for them")

    if language in LINTED_LANGUAGES:
        suggestions.append("Consider using ESLint and Prettier for code quality")

    return suggestions


def _oversize_report(path: Path, language: str, size: int) -> FileReport:
    _LOG.info("Skipping %s: %d bytes exceeds the size limit", path, size)
    return FileReport(
        path=str(path),
        language=language,
        size=size,
        complexity=0,
        findings=(
            Finding(
                kind=KIND_POTENTIAL_BUG,
                severity=SEVERITY_LOW,
                message=f"File too large to analyze ({size / 1024 / 1024:.1f}MB)",
                file_path=str(path),
                suggestion="Consider breaking this file into smaller modules",
            ),
        ),
        suggestions=(OVERSIZE_SUGGESTION,),
    )


def _unreadable_report(path: Path, language: str, size: int, exc: BaseException) -> FileReport:
    return FileReport(
        path=str(path),
        language=language,
        size=size,
        complexity=0,
        findings=(read_failure_finding(path, exc),),
    )
