from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any

KIND_SECRET = "secret"
KIND_COMPLEXITY = "complexity"
KIND_STYLE = "style"
KIND_POTENTIAL_BUG = "potential-bug"
KINDS = (KIND_SECRET, KIND_COMPLEXITY, KIND_STYLE, KIND_POTENTIAL_BUG)

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"
SEVERITIES = (SEVERITY_LOW, SEVERITY_MEDIUM, SEVERITY_HIGH)

LLM_PROVIDERS = ("ollama", "openai-compatible", "local", "none")
LOG_LEVELS = ("error", "warn", "info", "debug")
OUTPUT_FORMATS = ("table", "json", "markdown")

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024


@dataclass(frozen=True)
class Rule:
    code: str
    kind: str
    severity: str
    message: str
    suggestion: str
    pattern: re.Pattern[str]

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


@dataclass(frozen=True)
class Finding:
    kind: str
    severity: str
    message: str
    file_path: str
    line_number: int | None = None
    suggestion: str | None = None
    rule_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FileReport:
    path: str
    language: str
    size: int
    complexity: int
    findings: tuple[Finding, ...] = ()
    suggestions: tuple[str, ...] = ()

    def count(self, severity: str) -> int:
        return sum(1 for item in self.findings if item.severity == severity)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["findings"] = [item.to_dict() for item in self.findings]
        payload["suggestions"] = list(self.suggestions)
        return payload


@dataclass(frozen=True)
class AnalysisSettings:
    enable_secret_detection: bool = True
    enable_complexity_analysis: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


@dataclass(frozen=True)
class LLMSettings:
    # Persisted for the user; nothing in the analyzer reads it.
    provider: str = "none"
    endpoint: str | None = "http://localhost:11434"
    model: str = "codellama:7b"
    max_tokens: int = 4096
    temperature: float = 0.7


@dataclass(frozen=True)
class GeneralSettings:
    log_level: str = "info"
    output_format: str = "table"


@dataclass(frozen=True)
class AppConfig:
    llm: LLMSettings = field(default_factory=LLMSettings)
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)
    general: GeneralSettings = field(default_factory=GeneralSettings)


@dataclass(frozen=True)
class ReadResult:
    success: bool
    output: str | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()
