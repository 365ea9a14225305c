from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from code_assistant.models import (
    LLM_PROVIDERS,
    LOG_LEVELS,
    OUTPUT_FORMATS,
    AnalysisSettings,
    AppConfig,
    GeneralSettings,
    LLMSettings,
)

_LOG = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CODE_ASSISTANT_CONFIG"


class ConfigError(ValueError):
    pass


def default_config_path() -> Path:
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".code-assistant" / "config.json"


def default_config() -> AppConfig:
    return AppConfig()


def load_config(path: str | Path | None = None) -> AppConfig:
    """Read the preference file, writing the defaults first if it is missing."""
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        config = default_config()
        save_config(config, config_path)
        _LOG.info("Wrote default configuration to %s", config_path)
        return config

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file is not valid JSON: {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file {config_path}: {exc}") from exc

    return config_from_dict(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    config_path = Path(path) if path is not None else default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as handle:
            json.dump(config_to_dict(config), handle, indent=2)
            handle.write("\n")
    except OSError as exc:
        raise ConfigError(f"Failed to save config to {config_path}: {exc}") from exc
    return config_path


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    return {
        "llm": {
            "provider": config.llm.provider,
            "endpoint": config.llm.endpoint,
            "model": config.llm.model,
            "maxTokens": config.llm.max_tokens,
            "temperature": config.llm.temperature,
        },
        "analysis": {
            "enableSecretDetection": config.analysis.enable_secret_detection,
            "enableComplexityAnalysis": config.analysis.enable_complexity_analysis,
            "maxFileSize": config.analysis.max_file_size,
        },
        "general": {
            "logLevel": config.general.log_level,
            "outputFormat": config.general.output_format,
        },
    }


def config_from_dict(raw: object) -> AppConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a JSON object")

    defaults = default_config()
    llm_raw = _section(raw, "llm")
    analysis_raw = _section(raw, "analysis")
    general_raw = _section(raw, "general")

    llm = LLMSettings(
        provider=_choice(llm_raw, "provider", LLM_PROVIDERS, defaults.llm.provider),
        endpoint=_optional_str(llm_raw.get("endpoint", defaults.llm.endpoint)),
        model=str(llm_raw.get("model", defaults.llm.model)),
        max_tokens=_int(llm_raw, "maxTokens", defaults.llm.max_tokens),
        temperature=_float(llm_raw, "temperature", defaults.llm.temperature),
    )

    analysis = AnalysisSettings(
        enable_secret_detection=_bool(
            analysis_raw, "enableSecretDetection", defaults.analysis.enable_secret_detection
        ),
        enable_complexity_analysis=_bool(
            analysis_raw, "enableComplexityAnalysis", defaults.analysis.enable_complexity_analysis
        ),
        max_file_size=_int(analysis_raw, "maxFileSize", defaults.analysis.max_file_size),
    )
    if analysis.max_file_size < 0:
        raise ConfigError("'analysis.maxFileSize' must not be negative")

    general = GeneralSettings(
        log_level=_choice(general_raw, "logLevel", LOG_LEVELS, defaults.general.log_level),
        output_format=_choice(general_raw, "outputFormat", OUTPUT_FORMATS, defaults.general.output_format),
    )

    return AppConfig(llm=llm, analysis=analysis, general=general)


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be an object")
    return value


def _choice(raw: dict, key: str, allowed: tuple[str, ...], default: str) -> str:
    value = str(raw.get(key, default)).strip().lower()
    if value not in allowed:
        raise ConfigError(f"'{key}' must be one of: {', '.join(allowed)}")
    return value


def _bool(raw: dict, key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value


def _int(raw: dict, key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer")
    return value


def _float(raw: dict, key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number")
    return float(value)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
