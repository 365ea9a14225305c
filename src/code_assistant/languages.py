from __future__ import annotations

from pathlib import Path

DEFAULT_LANGUAGE = "text"

EXTENSION_LANGUAGE_MAP = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".jsx": "jsx",
    ".tsx": "tsx",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".sh": "shell",
    ".bash": "shell",
    ".zsh": "shell",
    ".ps1": "powershell",
    ".sql": "sql",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".json": "json",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".md": "markdown",
    ".dockerfile": "docker",
    ".vue": "vue",
    ".svelte": "svelte",
}


def detect_language(path: str | Path) -> str:
    return EXTENSION_LANGUAGE_MAP.get(Path(path).suffix.lower(), DEFAULT_LANGUAGE)
