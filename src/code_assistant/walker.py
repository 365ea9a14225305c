from __future__ import annotations

import os
from pathlib import Path


def list_candidate_files(
    root: str | Path,
    *,
    recursive: bool = False,
    include_hidden: bool = False,
    max_files: int | None = None,
) -> list[Path]:
    """Return regular files under ``root`` as absolute paths, in sorted order.

    Hidden names (leading ``.``) are skipped at any depth below ``root``
    unless ``include_hidden`` is set; hidden directories are not descended.
    A ``max_files`` of 0 or None means no limit.
    """
    base = Path(root).resolve()
    files: list[Path] = []

    for current, dirs, names in os.walk(base):
        if not include_hidden:
            dirs[:] = [d for d in dirs if not d.startswith(".")]
        for name in names:
            if not include_hidden and name.startswith("."):
                continue
            path = Path(current) / name
            if path.is_file():
                files.append(path)
        if not recursive:
            break

    files.sort()
    if max_files:
        files = files[:max_files]
    return files
