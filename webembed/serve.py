"""A small HTTP server that serves the files of an asset folder."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import unquote, urlsplit

from .embed import AssetFolder, open_folder
from .files import EmbedableFile

__all__ = ["describe_sizes", "make_handler", "main"]


def describe_sizes(file: EmbedableFile) -> str:
    """Summarise the plain and precompressed sizes of ``file``."""
    if file.data is None:
        raise ValueError(f"file {file.name!r} has no uncompressed contents")

    def size(data: bytes | None) -> str:
        return "not" if data is None else f"{len(data)} bytes"

    return (
        f"{file.name}: {len(file.data)} bytes, {size(file.data_br)} compressed with BR, "
        f"{size(file.data_gzip)} compressed with GZIP"
    )


def make_handler(folder: AssetFolder) -> type[BaseHTTPRequestHandler]:
    """Build a request handler serving ``/`` as index.html and ``/dist/<path>``."""

    class AssetHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            route = urlsplit(self.path).path
            if route == "/":
                self._serve_file("index.html")
            elif route.startswith("/dist/"):
                self._serve_file(unquote(route[len("/dist/"):]))
            else:
                self._send(404, [], b"")

        def _serve_file(self, path: str) -> None:
            file = folder.get(path)
            if file is None:
                self._send(404, [], b"404 Not Found")
                return
            if file.data is not None:
                print(describe_sizes(file))
            headers = [("ETag", file.etag())]
            last_modified = file.last_modified()
            if last_modified is not None:
                headers.append(("Last-Modified", last_modified))
            if file.data_br is not None:
                headers.append(("Content-Encoding", "br"))
                body = file.data_br
            elif file.data is not None:
                body = file.data
            else:
                self._send(500, [], b"500 Internal Server Error")
                return
            self._send(200, headers, body)

        def _send(self, status: int, headers: list[tuple[str, str]], body: bytes) -> None:
            self.send_response(status)
            for name, value in headers:
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

    return AssetHandler


def main(argv: Sequence[str] | None = None) -> int:
    """Serve a folder over HTTP until interrupted."""
    parser = argparse.ArgumentParser(description="Serve a folder of web assets.")
    parser.add_argument("--folder", default="examples/public", help="folder to serve")
    parser.add_argument("--prefix", default="", help="prefix of every public path")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--embed", action="store_true", help="load and compress every file up front"
    )
    args = parser.parse_args(argv)

    folder = open_folder(args.folder, prefix=args.prefix, embed=args.embed)
    server = ThreadingHTTPServer((args.host, args.port), make_handler(folder))
    print(f"Launching server at http://{args.host}:{args.port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0