import json

import pytest

from code_assistant.models import FileReport, Finding
from code_assistant.reporting import render, render_markdown, render_table


def _report(findings=(), suggestions=()) -> FileReport:
    return FileReport(
        path="src/app.js",
        language="javascript",
        size=2048,
        complexity=7,
        findings=tuple(findings),
        suggestions=tuple(suggestions),
    )


def _secret(line: int) -> Finding:
    return Finding(
        kind="secret",
        severity="high",
        message="Potential API key found in code",
        file_path="src/app.js",
        line_number=line,
        suggestion="Move to environment variable or config file",
        rule_code="SECRET_API_KEY",
    )


def test_json_output_is_parseable():
    payload = json.loads(render([_report([_secret(3)])], "json"))

    assert payload[0]["path"] == "src/app.js"
    assert payload[0]["findings"][0]["kind"] == "secret"
    assert payload[0]["findings"][0]["line_number"] == 3


def test_markdown_lists_issues_and_suggestions():
    text = render_markdown([_report([_secret(1)], ["Consider using ESLint and Prettier for code quality"])])

    assert "## src/app.js" in text
    assert "- **Complexity**: 7" in text
    assert "- HIGH: Potential API key found in code (line 1)" in text
    assert "*Suggestion: Move to environment variable or config file*" in text
    assert "- Consider using ESLint and Prettier for code quality" in text


def test_table_previews_first_findings():
    text = render_table([_report([_secret(1), _secret(2), _secret(3)], ["Tip one", "Tip two"]), _report()])

    assert "Files analyzed: 2" in text
    assert "Total issues found: 3" in text
    assert "High severity issues: 3" in text
    assert "(line 2)" in text
    assert "(line 3)" not in text
    assert "... and 1 more" in text
    assert "No issues found" in text
    assert "Tip: Tip one" in text
    assert "Tip two" not in text


def test_unknown_format_rejected():
    with pytest.raises(ValueError, match="Unsupported output format"):
        render([], "html")
