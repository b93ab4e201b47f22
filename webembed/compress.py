"""Precompression of file contents."""

from __future__ import annotations

import gzip

import brotli

__all__ = ["compress_gzip", "compress_br"]

_GZIP_LEVEL = 6


def compress_gzip(data: bytes) -> bytes:
    """Compress ``data`` with gzip at the default level."""
    return gzip.compress(bytes(data), compresslevel=_GZIP_LEVEL)


def compress_br(data: bytes) -> bytes:
    """Compress ``data`` with brotli at its default (highest) quality."""
    return brotli.compress(bytes(data))