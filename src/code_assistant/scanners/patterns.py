from __future__ import annotations

import re

from code_assistant.models import (
    KIND_POTENTIAL_BUG,
    KIND_SECRET,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    Rule,
)

# A line mentioning one of these loads its value from the environment.
ENV_MARKERS = ("process.env", "$ENV")


def _secret(code: str, label: str, pattern: str, suggestion: str, flags: int = re.IGNORECASE) -> Rule:
    return Rule(
        code=code,
        kind=KIND_SECRET,
        severity=SEVERITY_HIGH,
        message=f"Potential {label} found in code",
        suggestion=suggestion,
        pattern=re.compile(pattern, flags),
    )


SECRET_RULES = (
    _secret(
        "SECRET_API_KEY",
        "API key",
        r"""api[_-]?key\s*[=:]\s*["'][a-zA-Z0-9]{20,}["']""",
        "Move to environment variable or config file",
    ),
    _secret(
        "SECRET_PASSWORD",
        "Password",
        r"""password\s*[=:]\s*["'][^"']{8,}["']""",
        "Use environment variables or secure config",
    ),
    _secret(
        "SECRET_PRIVATE_KEY",
        "Private key",
        r"-----BEGIN [A-Z ]*PRIVATE KEY-----",
        "Store private keys securely, not in code",
        flags=0,
    ),
    _secret(
        "SECRET_TOKEN",
        "Token",
        r"""token\s*[=:]\s*["'][a-zA-Z0-9_-]{32,}["']""",
        "Use environment variables for tokens",
    ),
)

ISSUE_RULES = (
    Rule(
        code="DEBUG_PRINT",
        kind=KIND_POTENTIAL_BUG,
        severity=SEVERITY_LOW,
        message="Console.log statement (consider removing for production)",
        suggestion="Use a proper logging library or remove debug logs",
        pattern=re.compile(r"console\.log\("),
    ),
    Rule(
        code="TODO_MARKER",
        kind=KIND_POTENTIAL_BUG,
        severity=SEVERITY_LOW,
        message="TODO/FIXME comment found",
        suggestion="Consider addressing this comment or creating an issue",
        pattern=re.compile(r"TODO:|FIXME:|HACK:", re.IGNORECASE),
    ),
    Rule(
        code="DYNAMIC_EVAL",
        kind=KIND_POTENTIAL_BUG,
        severity=SEVERITY_MEDIUM,
        message="Use of eval() can be dangerous",
        suggestion="Consider safer alternatives to eval()",
        pattern=re.compile(r"eval\s*\("),
    ),
)

TODO_RULE_CODES = frozenset({"TODO_MARKER"})


def references_environment(line: str) -> bool:
    return any(marker in line for marker in ENV_MARKERS)
