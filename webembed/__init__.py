"""Folders of static web assets with hashes, ETags, MIME types and gzip/brotli variants."""

__version__ = "11.2.1"