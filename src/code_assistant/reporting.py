from __future__ import annotations

import json
from pathlib import Path

from code_assistant.models import SEVERITY_HIGH, SEVERITY_MEDIUM, FileReport

PREVIEW_FINDINGS = 2


def render(reports: list[FileReport], fmt: str) -> str:
    renderers = {
        "json": render_json,
        "markdown": render_markdown,
        "table": render_table,
    }
    renderer = renderers.get(fmt)
    if renderer is None:
        raise ValueError(f"Unsupported output format: {fmt}")
    return renderer(reports)


def render_json(reports: list[FileReport]) -> str:
    return json.dumps([report.to_dict() for report in reports], indent=2, ensure_ascii=True)


def render_markdown(reports: list[FileReport]) -> str:
    lines = ["# Analysis Report", ""]
    for report in reports:
        lines.append(f"## {report.path}")
        lines.append(f"- **Language**: {report.language}")
        lines.append(f"- **Size**: {_kilobytes(report.size, 2)} KB")
        if report.complexity > 0:
            lines.append(f"- **Complexity**: {report.complexity}")
        if report.findings:
            lines.append("")
            lines.append("### Issues:")
            for finding in report.findings:
                location = f" (line {finding.line_number})" if finding.line_number else ""
                lines.append(f"- {finding.severity.upper()}: {finding.message}{location}")
                if finding.suggestion:
                    lines.append(f"  *Suggestion: {finding.suggestion}*")
        if report.suggestions:
            lines.append("")
            lines.append("### Suggestions:")
            lines.extend(f"- {item}" for item in report.suggestions)
        lines.append("")
    return "\n".join(lines)


def render_table(reports: list[FileReport]) -> str:
    total = sum(len(report.findings) for report in reports)
    high = sum(report.count(SEVERITY_HIGH) for report in reports)

    lines = ["Analysis Results:", ""]
    lines.append(f"Files analyzed: {len(reports)}")
    lines.append(f"Total issues found: {total}")
    if high:
        lines.append(f"High severity issues: {high}")
    lines.append("")

    for index, report in enumerate(reports, start=1):
        details = f"Language: {report.language} | Size: {_kilobytes(report.size, 1)}KB"
        if report.complexity > 0:
            details += f" | Complexity: {report.complexity}"
        lines.append(f"{index}. {report.path}")
        lines.append(f"   {details}")

        if report.findings:
            lines.append(f"   Issues: {len(report.findings)} ({_worst_severity(report)})")
            for finding in report.findings[:PREVIEW_FINDINGS]:
                location = f" (line {finding.line_number})" if finding.line_number else ""
                lines.append(f"   [{finding.severity.upper()}] {finding.message}{location}")
            hidden = len(report.findings) - PREVIEW_FINDINGS
            if hidden > 0:
                lines.append(f"   ... and {hidden} more")
        else:
            lines.append("   No issues found")

        if report.suggestions:
            lines.append(f"   Tip: {report.suggestions[0]}")
        lines.append("")

    return "\n".join(lines)


def write_report(path: str | Path, text: str) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as handle:
        handle.write(text)
        if not text.endswith("\n"):
            handle.write("\n")
    return out


def _worst_severity(report: FileReport) -> str:
    if report.count(SEVERITY_HIGH):
        return SEVERITY_HIGH
    if report.count(SEVERITY_MEDIUM):
        return SEVERITY_MEDIUM
    return "low"


def _kilobytes(size: int, digits: int) -> str:
    return f"{size / 1024:.{digits}f}"
