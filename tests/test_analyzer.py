from pathlib import Path

import pytest

from code_assistant.analyzer import OVERSIZE_SUGGESTION, AnalysisError, FileAnalyzer, build_suggestions
from code_assistant.languages import detect_language
from code_assistant.models import (
    KIND_POTENTIAL_BUG,
    KIND_SECRET,
    SEVERITY_LOW,
    AnalysisSettings,
    Finding,
)

API_KEY_LINE = 'const api_key = "abcdef1234567890abcdef1234567890";\n'


def _todo(line: int) -> Finding:
    return Finding(
        kind=KIND_POTENTIAL_BUG,
        severity=SEVERITY_LOW,
        message="TODO/FIXME comment found",
        file_path="x.py",
        line_number=line,
        rule_code="TODO_MARKER",
    )


def test_analyze_file_reports_secrets_and_suggestions(tmp_path: Path):
    source = tmp_path / "app.js"
    source.write_text(API_KEY_LINE, encoding="utf-8")

    report = FileAnalyzer().analyze_file(source)

    assert report.path == str(source)
    assert report.language == "javascript"
    assert report.size == len(API_KEY_LINE.encode("utf-8"))
    assert report.complexity == 1
    assert [item.kind for item in report.findings] == [KIND_SECRET]
    assert report.suggestions == (
        "Move sensitive data to environment variables or secure config files",
        "Consider using ESLint and Prettier for code quality",
    )


def test_oversized_file_is_never_scanned(tmp_path: Path):
    source = tmp_path / "big.py"
    source.write_text(API_KEY_LINE * 10 + "if (x) {}\n" * 10, encoding="utf-8")

    report = FileAnalyzer(AnalysisSettings(max_file_size=64)).analyze_file(source)

    assert report.complexity == 0
    assert len(report.findings) == 1
    assert report.findings[0].kind == KIND_POTENTIAL_BUG
    assert report.findings[0].severity == SEVERITY_LOW
    assert "too large" in report.findings[0].message
    assert report.suggestions == (OVERSIZE_SUGGESTION,)


def test_unreadable_file_yields_single_finding(tmp_path: Path, monkeypatch):
    source = tmp_path / "broken.py"
    source.write_bytes(b"\xff\xfe\x00\x81")

    def fail(text):
        raise AssertionError("complexity must not be computed")

    monkeypatch.setattr("code_assistant.analyzer.estimate_complexity", fail)

    report = FileAnalyzer().analyze_file(source)

    assert report.complexity == 0
    assert len(report.findings) == 1
    assert report.findings[0].kind == KIND_POTENTIAL_BUG
    assert report.findings[0].severity == SEVERITY_LOW
    assert "Could not read" in report.findings[0].message
    assert report.suggestions == ()


def test_vanished_file_yields_read_failure(tmp_path: Path):
    report = FileAnalyzer().analyze_file(tmp_path / "gone.ts")

    assert report.size == 0
    assert len(report.findings) == 1
    assert "Could not read" in report.findings[0].message


def test_toggles_control_scanner_and_estimator(tmp_path: Path):
    source = tmp_path / "flow.py"
    source.write_text("# TODO: later\nif (ready) {}\n", encoding="utf-8")

    no_secrets = FileAnalyzer(AnalysisSettings(enable_secret_detection=False)).analyze_file(source)
    assert no_secrets.findings == ()
    assert no_secrets.complexity == 2

    no_complexity = FileAnalyzer(AnalysisSettings(enable_complexity_analysis=False)).analyze_file(source)
    assert [item.rule_code for item in no_complexity.findings] == ["TODO_MARKER"]
    assert no_complexity.complexity == 0


def test_suggestions_are_additive_and_ordered():
    secret = Finding(kind=KIND_SECRET, severity="high", message="Potential Token found in code", file_path="x.ts")
    findings = [secret] + [_todo(line) for line in range(1, 5)]

    assert build_suggestions(findings, 60, "typescript") == [
        "Consider breaking this file into smaller, more focused modules",
        "High complexity detected - refactoring recommended",
        "Move sensitive data to environment variables or secure config files",
        "Consider addressing TODO comments or creating issues for them",
        "Consider using ESLint and Prettier for code quality",
    ]


def test_suggestion_thresholds():
    assert build_suggestions([], 20, "python") == []
    assert build_suggestions([], 21, "python") == [
        "Consider breaking this file into smaller, more focused modules"
    ]
    assert build_suggestions([_todo(line) for line in range(3)], 1, "go") == []
    assert build_suggestions([], 1, "jsx") == []


def test_analyze_path_rejects_missing_path(tmp_path: Path):
    with pytest.raises(AnalysisError, match="Path does not exist"):
        FileAnalyzer().analyze_path(tmp_path / "nope")


def test_analyze_path_single_file(tmp_path: Path):
    source = tmp_path / "one.rs"
    source.write_text("fn main() {}\n", encoding="utf-8")

    reports = FileAnalyzer().analyze_path(source)

    assert [report.language for report in reports] == ["rust"]


@pytest.mark.parametrize("jobs", [1, 4])
def test_analyze_path_keeps_enumeration_order(tmp_path: Path, jobs: int):
    for name in ("d.go", "b.py", "a.py", "c.js"):
        (tmp_path / name).write_text("x = 1\n", encoding="utf-8")

    reports = FileAnalyzer().analyze_path(tmp_path, jobs=jobs)

    assert [Path(report.path).name for report in reports] == ["a.py", "b.py", "c.js", "d.go"]


def test_analyze_path_skips_failing_file(tmp_path: Path, monkeypatch):
    for name in ("a.py", "b.py", "c.py"):
        (tmp_path / name).write_text("x = 1\n", encoding="utf-8")

    analyzer = FileAnalyzer()
    real_analyze = analyzer.analyze_file

    def flaky(path):
        if Path(path).name == "b.py":
            raise RuntimeError("boom")
        return real_analyze(path)

    monkeypatch.setattr(analyzer, "analyze_file", flaky)

    reports = analyzer.analyze_path(tmp_path)

    assert [Path(report.path).name for report in reports] == ["a.py", "c.py"]


def test_analyze_path_honours_walker_options(tmp_path: Path):
    (tmp_path / "top.py").write_text("x = 1\n", encoding="utf-8")
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "inner.py").write_text("y = 2\n", encoding="utf-8")

    analyzer = FileAnalyzer()

    assert len(analyzer.analyze_path(tmp_path)) == 1
    assert len(analyzer.analyze_path(tmp_path, recursive=True)) == 2
    assert len(analyzer.analyze_path(tmp_path, recursive=True, max_files=1)) == 1


def test_detect_language():
    assert detect_language("src/main.PY") == "python"
    assert detect_language("lib.mjs") == "javascript"
    assert detect_language("deploy.yml") == "yaml"
    assert detect_language("Dockerfile") == "text"
    assert detect_language("notes.unknown") == "text"


def test_analyze_file_keeps_carriage_returns_inside_lines(tmp_path: Path):
    source = tmp_path / "legacy.js"
    source.write_bytes(b"a = 1\r\r\nconsole.log(a)\nx\rif (a) {}\n")

    report = FileAnalyzer().analyze_file(source)

    assert [item.line_number for item in report.findings] == [2]
    assert report.complexity == 2


def test_unreadable_file_reported_without_secret_detection(tmp_path: Path):
    source = tmp_path / "broken.ts"
    source.write_bytes(b"\xff\xfe\x00\x81")

    report = FileAnalyzer(AnalysisSettings(enable_secret_detection=False)).analyze_file(source)

    assert report.complexity == 0
    assert [item.kind for item in report.findings] == [KIND_POTENTIAL_BUG]
    assert "Could not read" in report.findings[0].message
