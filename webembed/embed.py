"""Folders of assets, served either straight from disk or from memory."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from pathlib import Path

from .compress import compress_br, compress_gzip
from .config import Config
from .files import DynamicFile, EmbedableFile, EmbeddedFile
from .walk import get_files

__all__ = [
    "AssetFolder",
    "DynamicFolder",
    "EmbeddedFolder",
    "embed_file",
    "resolve_folder_path",
    "open_folder",
]

_VARIABLE = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<plain>[A-Za-z0-9_]+))")


class AssetFolder(ABC):
    """A folder of files that can be looked up by their public path."""

    @abstractmethod
    def get(self, path: str) -> EmbedableFile | None:
        """Return the file at ``path``, or None if there is none."""


class DynamicFolder(AssetFolder):
    """Reads each requested file from disk at the time it is asked for."""

    def __init__(
        self,
        folder_path: str | os.PathLike[str],
        config: Config | None = None,
        prefix: str = "",
    ) -> None:
        self.folder_path = Path(folder_path)
        self.config = Config() if config is None else config
        self.prefix = prefix

    def get(self, path: str) -> DynamicFile | None:
        if not path.startswith(self.prefix):
            return None
        relative = path[len(self.prefix):]
        if not self.config.should_include(relative):
            return None
        try:
            return DynamicFile.read_from_fs(self.folder_path / relative)
        except (OSError, ValueError):
            return None


class EmbeddedFolder(AssetFolder):
    """Holds every file of a folder in memory, prepared ahead of time."""

    def __init__(self, files: Mapping[str, EmbeddedFile]) -> None:
        self._files = dict(files)

    @classmethod
    def from_folder(
        cls,
        folder_path: str | os.PathLike[str],
        config: Config | None = None,
        prefix: str = "",
    ) -> EmbeddedFolder:
        """Read and prepare every file under ``folder_path`` that ``config`` admits."""
        config = Config() if config is None else config
        files: dict[str, EmbeddedFile] = {}
        for entry in get_files(folder_path, config, prefix):
            if entry.rel_path in files:
                continue
            try:
                file = DynamicFile.read_from_fs(entry.full_canonical_path)
            except (OSError, ValueError):
                continue
            files[entry.rel_path] = embed_file(file, config, entry.rel_path)
        return cls(files)

    def get(self, path: str) -> EmbeddedFile | None:
        return self._files.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)


def embed_file(file: EmbedableFile, config: Config, rel_path: str) -> EmbeddedFile:
    """Prepare ``file`` for holding in memory, compressing it as ``config`` asks.

    ``preserve_source`` decides whether the uncompressed contents are kept;
    a path matching a preserve-source exception inverts that decision.
    """
    data = file.data
    if data is None:
        raise ValueError(f"file {file.name!r} has no contents to embed")
    data_gzip = compress_gzip(data) if config.gzip else None
    data_br = compress_br(data) if config.br else None
    preserve = config.preserve_source != config.is_preserve_source_except(rel_path)
    return EmbeddedFile(
        name=file.name,
        data=bytes(data) if preserve else None,
        data_gzip=data_gzip,
        data_br=data_br,
        hash=file.hash,
        etag=file.etag(),
        last_modified=file.last_modified(),
        last_modified_timestamp=file.last_modified_timestamp,
        mime_type=file.mime_type,
    )


def _expand(text: str) -> str:
    if text == "~" or text.startswith("~/") or text.startswith("~" + os.sep):
        text = os.path.expanduser("~") + text[1:]

    def substitute(match: re.Match[str]) -> str:
        name = match.group("braced") if match.group("braced") is not None else match.group("plain")
        value = os.environ.get(name)
        if value is None:
            raise ValueError(f"environment variable {name!r} is not set")
        return value

    return _VARIABLE.sub(substitute, text)


def resolve_folder_path(
    folder: str | os.PathLike[str], base_dir: str | os.PathLike[str] | None = None
) -> str:
    """Expand ``~`` and environment variables, then anchor a relative path at ``base_dir``."""
    expanded = _expand(os.fspath(folder))
    if os.path.isabs(expanded):
        return expanded
    base = os.getcwd() if base_dir is None else os.fspath(base_dir)
    return os.path.join(base, expanded)


def open_folder(
    folder: str | os.PathLike[str],
    prefix: str = "",
    config: Config | None = None,
    embed: bool = False,
    base_dir: str | os.PathLike[str] | None = None,
) -> AssetFolder:
    """Open ``folder`` as an in-memory folder when ``embed`` is set, else as a disk one."""
    folder_path = resolve_folder_path(folder, base_dir)
    config = Config() if config is None else config
    if embed:
        return EmbeddedFolder.from_folder(folder_path, config, prefix)
    return DynamicFolder(folder_path, config, prefix)