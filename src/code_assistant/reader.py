from __future__ import annotations

from pathlib import Path

from code_assistant.models import DEFAULT_MAX_FILE_SIZE, ReadResult


def read_file(path: str | Path, *, max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> ReadResult:
    file_path = Path(path)
    if not file_path.exists():
        return ReadResult(success=False, error=f"File does not exist: {path}")

    try:
        size = file_path.stat().st_size
        if size > max_file_size:
            return ReadResult(
                success=False,
                error=f"File too large ({size / 1024 / 1024:.1f}MB)",
                warnings=("Consider viewing this file in chunks or using a dedicated viewer",),
            )
        text = file_path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        return ReadResult(success=False, error=f"Failed to read file: {exc}")

    return ReadResult(success=True, output=text)
