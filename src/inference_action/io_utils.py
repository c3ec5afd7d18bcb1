"""Input/output helpers."""

from __future__ import annotations

from pathlib import Path

from inference_action.errors import FileReadError


def file_exists(path: str | Path) -> bool:
    return Path(path).is_file()


def read_text(path: str | Path, label: str) -> str:
    # newline="" keeps CRLF line endings as they are on disk.
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"{label} file could not be read: {path}: {exc}") from exc
