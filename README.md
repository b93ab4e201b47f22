# webembed

`webembed` turns a folder of static web assets into files that are ready to
serve over HTTP. For each file it provides:

- `name` (the file name) and `data` (the contents),
- `hash`, a base85-encoded SHA-256 digest, and `etag()`, that hash in double
  quotes,
- `last_modified_timestamp`, whole seconds since the UNIX epoch, and
  `last_modified()`, the same moment as an RFC 2822 date in UTC for a
  `Last-Modified` header,
- `mime_type`, guessed from the file extension (or `None`),
- `data_gzip` and `data_br`, gzip and brotli compressed contents, or `None`
  when no precompression was done.

## Installing

```
pip install webembed
```

## Folders

`webembed.embed` has two kinds of `AssetFolder`. Both answer `get(path)` with
a file, or `None` when there is no such file.

- `DynamicFolder` reads each file from disk when it is asked for and returns a
  `DynamicFile`. Edits show up straight away; its `data_gzip` and `data_br`
  are always `None`.
- `EmbeddedFolder` reads and compresses every admitted file once, when it is
  built with `EmbeddedFolder.from_folder(...)`, and returns `EmbeddedFile`s
  held in memory. It also supports `in`, iteration over its paths and `len()`.

Both file types derive from `webembed.files.EmbedableFile`, so code that
serves them need not know which kind it got. Two files compare equal when
their hashes are equal.

`open_folder` picks between them:

```python
from webembed.config import Config
from webembed.embed import open_folder

config = Config()
config.add_exclude("images/*")
config.add_include("*.jpg")

assets = open_folder("public", prefix="", config=config, embed=True, base_dir=".")

index = assets.get("index.html")
if index is not None:
    print(index.etag(), index.last_modified(), index.mime_type)
```

`resolve_folder_path` expands a leading `~` and `$NAME` / `${NAME}`
environment variables (an unset variable raises `ValueError`), then joins a
relative path to `base_dir`, or to the current directory when `base_dir` is
`None`.

`embed_file(file, config, rel_path)` turns any file into an `EmbeddedFile`
according to a `Config`.

### Prefixes

With a prefix such as `"static/"`, a file stored as `index.html` is looked up
as `static/index.html`; the bare `index.html` is then not found.

## Configuration

`webembed.config.Config` has three switches, all `True` by default:

- `gzip` – compute a gzip variant,
- `br` – compute a brotli variant,
- `preserve_source` – keep the uncompressed contents.

and three lists of glob patterns, matched against the path relative to the
folder (including any prefix when files are listed for an `EmbeddedFolder`):

- `add_include(pattern)` and `add_exclude(pattern)`: a file is kept if it
  matches any include pattern, or if it matches no exclude pattern. With the
  configuration above, `images/doc.txt` is left out while `images/flower.jpg`
  is kept.
- `add_preserve_source_except(pattern)`: flips `preserve_source` for matching
  files — for example, `preserve_source=False` plus `"*.html"` keeps the
  uncompressed contents of HTML files only.

Patterns support `*` and `?` (both also match `/`), `**/` for any number of
directories, `[...]` and `[!...]` classes, `{a,b}` alternatives and `\`
escapes. A malformed pattern raises `ValueError`.

`read_attribute_config(settings)` builds a `Config` from a mapping or from
`(name, value)` pairs using the names `include`, `exclude`,
`preserve_source_except` (strings; repeated entries accumulate) and `gzip`,
`br`, `preserve_source` (booleans). Other names and values of the wrong type
are ignored.

## Lower-level pieces

- `webembed.walk.get_files(folder_path, config, prefix)` yields a `FileEntry`
  (`rel_path`, `full_canonical_path`) for each admitted file, in name order,
  following symbolic links without looping.
- `webembed.compress.compress_gzip(data)` and `compress_br(data)` return the
  compressed bytes.
- `webembed.files.DynamicFile.read_from_fs(path)` reads one file; it raises
  `OSError` when the file cannot be read.

## Serving from the command line

```
webembed-serve --folder public --port 8000 --embed
```

Options: `--folder` (default `examples/public`), `--prefix`, `--host`
(default `127.0.0.1`), `--port` (default `8000`) and `--embed` (load and
compress every file up front instead of reading from disk per request).

The server answers `GET /` with `index.html` and `GET /dist/<path>` with
`<path>`; anything else, and any missing file, gets a 404. It sets `ETag` and
`Last-Modified`, and sends the brotli variant with `Content-Encoding: br`
whenever one exists. For each file with uncompressed contents it prints a
line from `webembed.serve.describe_sizes` with its plain, brotli and gzip
sizes.

## What it does not do

- The server does not look at `Accept-Encoding`: a client that cannot decode
  brotli gets unreadable bodies from an embedded folder. It does not answer
  conditional requests (`If-None-Match`, `If-Modified-Since`) with 304, and it
  handles only `GET`.
- An `EmbeddedFolder` lives in memory for the life of the process; nothing is
  written to disk or bundled into a distributable artefact.