"""Settings that control which files are embedded and how they are stored."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = ["Config", "read_attribute_config"]


def _translate(pattern: str) -> str:
    """Turn a shell-style glob into a regular expression source string.

    ``*`` and ``?`` also match ``/``. A ``**`` that forms a whole path
    component followed by ``/`` may match zero directories. Supported syntax:
    ``\\`` escapes, ``[...]`` and ``[!...]`` classes and ``{a,b}`` alternatives.
    """
    parts: list[str] = []
    alternates: list[list[str]] | None = None
    length = len(pattern)
    pos = 0

    def emit(chunk: str) -> None:
        (alternates[-1] if alternates is not None else parts).append(chunk)

    while pos < length:
        char = pattern[pos]
        if char == "\\":
            if pos + 1 >= length:
                raise ValueError("dangling '\\' at the end of the glob")
            emit(re.escape(pattern[pos + 1]))
            pos += 2
        elif char == "*":
            end = pos
            while end < length and pattern[end] == "*":
                end += 1
            at_boundary = pos == 0 or pattern[pos - 1] == "/"
            if end - pos == 2 and at_boundary and end < length and pattern[end] == "/":
                emit("(?:.*/)?")
                end += 1
            else:
                emit(".*")
            pos = end
        elif char == "?":
            emit(".")
            pos += 1
        elif char == "[":
            chunk, pos = _translate_class(pattern, pos)
            emit(chunk)
        elif char == "{":
            if alternates is not None:
                raise ValueError("nested alternates are not allowed")
            alternates = [[]]
            pos += 1
        elif char == "}":
            if alternates is None:
                raise ValueError("unopened alternate group")
            parts.append("(?:" + "|".join("".join(alt) for alt in alternates) + ")")
            alternates = None
            pos += 1
        elif char == "," and alternates is not None:
            alternates.append([])
            pos += 1
        else:
            emit(re.escape(char))
            pos += 1

    if alternates is not None:
        raise ValueError("unclosed alternate group")
    return "".join(parts)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class beginning at ``start``; return it and the next position."""
    length = len(pattern)
    pos = start + 1
    negated = pos < length and pattern[pos] in "!^"
    if negated:
        pos += 1
    members: list[str] = []
    first = True
    while True:
        if pos >= length:
            raise ValueError("unclosed character class")
        char = pattern[pos]
        if char == "]" and not first:
            pos += 1
            break
        first = False
        if pos + 2 < length and pattern[pos + 1] == "-" and pattern[pos + 2] != "]":
            low, high = char, pattern[pos + 2]
            if low > high:
                raise ValueError(f"invalid range {low}-{high}")
            members.append(f"{re.escape(low)}-{re.escape(high)}")
            pos += 3
        else:
            members.append(re.escape(char))
            pos += 1
    return "[" + ("^" if negated else "") + "".join(members) + "]", pos


@dataclass(frozen=True)
class _Glob:
    pattern: str
    regex: re.Pattern[str] = field(compare=False, repr=False)

    @classmethod
    def compile(cls, pattern: str, purpose: str) -> _Glob:
        try:
            source = _translate(pattern)
        except ValueError as error:
            raise ValueError(
                f"Failed to parse glob pattern for {purpose}: {pattern!r}: {error}"
            ) from error
        return cls(pattern, re.compile(source, re.DOTALL))

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


@dataclass
class Config:
    """Which files to embed, and whether to precompress and keep their sources."""

    gzip: bool = True
    br: bool = True
    preserve_source: bool = True
    _includes: list[_Glob] = field(default_factory=list, init=False, repr=False)
    _excludes: list[_Glob] = field(default_factory=list, init=False, repr=False)
    _preserve_source_except: list[_Glob] = field(
        default_factory=list, init=False, repr=False
    )

    def add_include(self, pattern: str) -> None:
        """Add a glob whose matches are always embedded."""
        self._includes.append(_Glob.compile(pattern, "include"))

    def add_exclude(self, pattern: str) -> None:
        """Add a glob whose matches are left out unless also included."""
        self._excludes.append(_Glob.compile(pattern, "exclude"))

    def add_preserve_source_except(self, pattern: str) -> None:
        """Add a glob whose matches invert the ``preserve_source`` setting."""
        self._preserve_source_except.append(
            _Glob.compile(pattern, "preserve source unless")
        )

    @property
    def includes(self) -> tuple[str, ...]:
        return tuple(glob.pattern for glob in self._includes)

    @property
    def excludes(self) -> tuple[str, ...]:
        return tuple(glob.pattern for glob in self._excludes)

    @property
    def preserve_source_except(self) -> tuple[str, ...]:
        return tuple(glob.pattern for glob in self._preserve_source_except)

    def is_preserve_source_except(self, path: str) -> bool:
        """True when ``path`` matches any preserve-source exception."""
        return any(glob.matches(path) for glob in self._preserve_source_except)

    def should_include(self, path: str) -> bool:
        """Decide whether ``path`` is embedded; includes win over excludes."""
        return any(glob.matches(path) for glob in self._includes) or not any(
            glob.matches(path) for glob in self._excludes
        )


_STRING_OPTIONS = {
    "include": Config.add_include,
    "exclude": Config.add_exclude,
    "preserve_source_except": Config.add_preserve_source_except,
}
_BOOL_OPTIONS = ("gzip", "br", "preserve_source")


def read_attribute_config(
    attributes: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> Config:
    """Build a Config from ``(name, value)`` settings.

    Unknown names and values of the wrong type are ignored. Repeated
    ``include``/``exclude``/``preserve_source_except`` entries accumulate.
    """
    items = attributes.items() if isinstance(attributes, Mapping) else attributes
    config = Config()
    for name, value in items:
        if name in _STRING_OPTIONS:
            if isinstance(value, str):
                _STRING_OPTIONS[name](config, value)
        elif name in _BOOL_OPTIONS:
            if isinstance(value, bool):
                setattr(config, name, value)
    return config