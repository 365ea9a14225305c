"""Per-line rule matching over a file's text."""

from __future__ import annotations

import logging
from pathlib import Path

from code_assistant.models import KIND_POTENTIAL_BUG, SEVERITY_LOW, Finding, Rule
from code_assistant.scanners.patterns import ISSUE_RULES, SECRET_RULES, references_environment

_LOG = logging.getLogger(__name__)


def scan_text(
    text: str,
    file_path: str,
    *,
    secret_rules: tuple[Rule, ...] = SECRET_RULES,
    issue_rules: tuple[Rule, ...] = ISSUE_RULES,
) -> list[Finding]:
    """Apply every rule to every line of ``text``.

    Lines are split on ``\\n`` only, so a trailing newline yields a final empty
    line. All matching rules are reported for a line; secret rules are skipped
    on lines that pull their value from the environment.
    """
    findings: list[Finding] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not references_environment(line):
            for rule in secret_rules:
                if rule.matches(line):
                    findings.append(_to_finding(rule, file_path, line_number))
        for rule in issue_rules:
            if rule.matches(line):
                findings.append(_to_finding(rule, file_path, line_number))
    return findings


def scan_file(path: str | Path) -> list[Finding]:
    file_path = Path(path)
    try:
        text = read_source(file_path)
    except (UnicodeDecodeError, OSError) as exc:
        return [read_failure_finding(file_path, exc)]
    return scan_text(text, str(file_path))


def read_source(path: str | Path) -> str:
    """Decode a file as UTF-8 without newline translation; a bare ``\\r`` stays in its line."""
    return Path(path).read_bytes().decode("utf-8")


def read_failure_finding(path: str | Path, exc: BaseException) -> Finding:
    _LOG.debug("Could not read %s: %s", path, exc)
    return Finding(
        kind=KIND_POTENTIAL_BUG,
        severity=SEVERITY_LOW,
        message=f"Could not read file: {exc}",
        file_path=str(path),
    )


def _to_finding(rule: Rule, file_path: str, line_number: int) -> Finding:
    return Finding(
        kind=rule.kind,
        severity=rule.severity,
        message=rule.message,
        file_path=file_path,
        line_number=line_number,
        suggestion=rule.suggestion,
        rule_code=rule.code,
    )
