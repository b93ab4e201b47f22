"""File objects served from a folder, read from disk or held in memory."""

from __future__ import annotations

import base64
import hashlib
import mimetypes
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

__all__ = ["EmbedableFile", "DynamicFile", "EmbeddedFile"]

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_NS_PER_SECOND = 1_000_000_000


def _format_rfc2822(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return (
        f"{_WEEKDAYS[moment.weekday()]}, {moment.day} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment:%H:%M:%S} +0000"
    )


def _modified_unix_timestamp(stat: os.stat_result) -> int:
    """Whole seconds since the epoch, truncated toward zero."""
    nanoseconds = stat.st_mtime_ns
    seconds = abs(nanoseconds) // _NS_PER_SECOND
    return seconds if nanoseconds >= 0 else -seconds


def _hash_contents(data: bytes) -> str:
    return base64.b85encode(hashlib.sha256(data).digest()).decode("ascii")


class EmbedableFile(ABC):
    """Common view of a file, whether read from disk or embedded in memory.

    ``data_gzip`` and ``data_br`` are the precompressed contents, or None when
    no precompression was done. ``hash`` is a base85 encoded SHA-256 digest.
    """

    name: str
    data: bytes | None
    data_gzip: bytes | None
    data_br: bytes | None
    hash: str
    last_modified_timestamp: int | None
    mime_type: str | None

    @abstractmethod
    def last_modified(self) -> str | None:
        """The RFC 2822 date for a ``Last-Modified`` header."""

    @abstractmethod
    def etag(self) -> str:
        """The file hash in double quotes, for an ``ETag`` header."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, hash={self.hash!r}, "
            f"last_modified={self.last_modified()!r}, mime_type={self.mime_type!r})"
        )


@dataclass(frozen=True, eq=False, repr=False)
class DynamicFile(EmbedableFile):
    """A file read from the file system on demand; never precompressed."""

    name: str
    data: bytes
    hash: str
    last_modified_timestamp: int | None = None
    mime_type: str | None = None
    data_gzip: bytes | None = field(default=None, init=False)
    data_br: bytes | None = field(default=None, init=False)

    @classmethod
    def read_from_fs(cls, path: str | os.PathLike[str]) -> DynamicFile:
        """Read the file at ``path``; raises OSError if it cannot be read."""
        with open(path, "rb") as handle:
            last_modified_timestamp = _modified_unix_timestamp(os.fstat(handle.fileno()))
            data = handle.read()
        name = Path(path).name
        if not name:
            raise ValueError(f"Unable to parse the file name of {os.fspath(path)!r}")
        mime_type, _ = mimetypes.guess_type(os.fspath(path))
        return cls(
            name=name,
            data=data,
            hash=_hash_contents(data),
            last_modified_timestamp=last_modified_timestamp,
            mime_type=mime_type,
        )

    def last_modified(self) -> str | None:
        if self.last_modified_timestamp is None:
            return None
        return _format_rfc2822(self.last_modified_timestamp)

    def etag(self) -> str:
        return f'"{self.hash}"'


class EmbeddedFile(EmbedableFile):
    """A file whose contents and metadata were prepared ahead of time."""

    __slots__ = (
        "name",
        "data",
        "data_gzip",
        "data_br",
        "hash",
        "_etag",
        "_last_modified",
        "last_modified_timestamp",
        "mime_type",
    )

    def __init__(
        self,
        name: str,
        data: bytes | None,
        data_gzip: bytes | None,
        data_br: bytes | None,
        hash: str,
        etag: str,
        last_modified: str | None,
        last_modified_timestamp: int | None,
        mime_type: str | None,
    ) -> None:
        self.name = name
        self.data = data
        self.data_gzip = data_gzip
        self.data_br = data_br
        self.hash = hash
        self._etag = etag
        self._last_modified = last_modified
        self.last_modified_timestamp = last_modified_timestamp
        self.mime_type = mime_type

    def last_modified(self) -> str | None:
        return self._last_modified

    def etag(self) -> str:
        return self._etag