"""Discovery of the files under a folder that a Config admits."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .config import Config

__all__ = ["FileEntry", "get_files"]


@dataclass(frozen=True)
class FileEntry:
    """A file found in a folder: its public path and its canonical location."""

    rel_path: str
    full_canonical_path: str


def _walk_files(directory: str, ancestors: frozenset[str]) -> Iterator[str]:
    """Yield file paths below ``directory``, following links but not loops."""
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        try:
            if entry.is_file():
                yield entry.path
            elif entry.is_dir():
                real = os.path.realpath(entry.path)
                if real not in ancestors:
                    yield from _walk_files(entry.path, ancestors | {real})
        except OSError:
            continue


def get_files(
    folder_path: str | os.PathLike[str], config: Config, prefix: str = ""
) -> Iterator[FileEntry]:
    """Yield an entry for each file under ``folder_path`` that ``config`` includes.

    Relative paths use ``/`` separators and start with ``prefix``.
    """
    folder = os.fspath(folder_path)
    if os.path.isfile(folder):
        paths: Iterator[str] = iter([folder])
    elif os.path.isdir(folder):
        paths = _walk_files(folder, frozenset({os.path.realpath(folder)}))
    else:
        return
    for path in paths:
        relative = Path(path).relative_to(folder)
        rel_path = prefix + "/".join(relative.parts)
        if not config.should_include(rel_path):
            continue
        full_canonical_path = str(Path(path).resolve(strict=True))
        yield FileEntry(rel_path=rel_path, full_canonical_path=full_canonical_path)