import gzip
import os

import brotli
import pytest

from webembed.config import Config
from webembed.embed import (
    AssetFolder,
    DynamicFolder,
    EmbeddedFolder,
    embed_file,
    open_folder,
    resolve_folder_path,
)
from webembed.files import DynamicFile

INDEX = "<!DOCTYPE html>\n<html><head><title>Test</title></head><body>Hello</body></html>\n"


@pytest.fixture
def public(tmp_path):
    root = tmp_path / "public"
    (root / "images").mkdir(parents=True)
    (root / "index.html").write_text(INDEX)
    (root / "images" / "doc.txt").write_text("Testing 1 2 3")
    (root / "images" / "flower.jpg").write_bytes(b"\xff\xd8\xff\xe0fakejpeg")
    (root / "images" / "llama.png").write_bytes(b"\x89PNG\r\n\x1a\nfakepng")
    return root


@pytest.fixture(params=[False, True], ids=["dynamic", "embedded"])
def folder(request, public):
    return open_folder(public, embed=request.param)


def test_existing_file_at_root_is_there(folder):
    assert folder.get("index.html") is not None
    assert folder.get("index.html").data.decode() == INDEX


def test_existing_file_in_folder_is_there(folder):
    assert folder.get("images/doc.txt").data == b"Testing 1 2 3"


def test_missing_file_is_none(folder):
    assert folder.get("does-not-exist") is None


def _get_with_base(folder: AssetFolder, path):
    return folder.get(path)


def test_using_base_class_also_works(folder):
    assert _get_with_base(folder, "index.html").name == "index.html"
    assert _get_with_base(folder, "does-not-exist") is None


def test_file_name_exists(folder):
    assert folder.get("index.html").name == "index.html"
    assert folder.get("images/flower.jpg").name == "flower.jpg"


def test_readme_example(folder):
    contents = folder.get("index.html").data.decode("utf-8")
    assert contents.startswith("<!DOCTYPE html>")


def test_etag_wraps_hash(folder):
    file = folder.get("index.html")
    assert file.etag() == f'"{file.hash}"'


def test_open_folder_kinds(public):
    dynamic = open_folder(public)
    embedded = open_folder(public, embed=True)
    assert isinstance(dynamic, DynamicFolder)
    assert isinstance(embedded, EmbeddedFolder)
    assert dynamic.get("index.html").hash == embedded.get("index.html").hash


def test_embedded_folder_lists_all_files(public):
    embedded = EmbeddedFolder.from_folder(public)
    assert sorted(embedded) == [
        "images/doc.txt",
        "images/flower.jpg",
        "images/llama.png",
        "index.html",
    ]
    assert len(embedded) == 4
    assert "index.html" in embedded


def test_html_files_are_compressed(public):
    file = open_folder(public, embed=True).get("index.html")
    assert gzip.decompress(file.data_gzip).decode() == INDEX
    assert brotli.decompress(file.data_br).decode() == INDEX


def test_dynamic_files_are_not_compressed(public):
    file = open_folder(public).get("index.html")
    assert file.data_gzip is None
    assert file.data_br is None


def test_compression_gzip_roundtrip(public):
    compressed = open_folder(public, embed=True).get("index.html").data_gzip
    assert gzip.decompress(compressed).decode().startswith("<!DOCTYPE html>")


def test_compression_br_roundtrip(public):
    compressed = open_folder(public, embed=True).get("index.html").data_br
    assert brotli.decompress(compressed).decode().startswith("<!DOCTYPE html>")


def test_gzip_is_used_by_default(public):
    file = open_folder(public, embed=True).get("index.html")
    assert gzip.decompress(file.data_gzip).decode() == INDEX


def test_gzip_is_used_when_enabled(public):
    config = Config(gzip=True)
    file = open_folder(public, config=config, embed=True).get("index.html")
    assert gzip.decompress(file.data_gzip).decode() == INDEX


def test_gzip_is_not_available_when_disabled(public):
    config = Config(gzip=False)
    file = open_folder(public, config=config, embed=True).get("index.html")
    assert file.data_gzip is None
    assert brotli.decompress(file.data_br).decode() == INDEX


def test_br_is_not_available_when_disabled(public):
    config = Config(br=False)
    file = open_folder(public, config=config, embed=True).get("index.html")
    assert file.data_br is None
    assert gzip.decompress(file.data_gzip).decode() == INDEX


@pytest.mark.parametrize("embed", [False, True])
def test_prefix_works(public, embed):
    folder = open_folder(public, prefix="foo/bar/", embed=embed)
    assert folder.get("index.html") is None
    assert folder.get("foo/bar/index.html").name == "index.html"


@pytest.mark.parametrize("embed", [False, True])
def test_include_exclude(public, embed):
    config = Config()
    config.add_exclude("images/*")
    config.add_include("*.jpg")
    folder = open_folder(public, config=config, embed=embed)
    assert folder.get("index.html").name == "index.html"
    assert folder.get("images/doc.txt") is None
    assert folder.get("images/llama.png") is None
    assert folder.get("images/flower.jpg").name == "flower.jpg"


def test_preserve_source_false_drops_data(public):
    config = Config(preserve_source=False)
    file = open_folder(public, config=config, embed=True).get("index.html")
    assert file.data is None
    assert gzip.decompress(file.data_gzip).decode() == INDEX


def test_preserve_source_except_inverts(public):
    config = Config(preserve_source=False)
    config.add_preserve_source_except("*.html")
    folder = open_folder(public, config=config, embed=True)
    assert folder.get("index.html").data.decode() == INDEX
    assert folder.get("images/doc.txt").data is None


def test_embed_file_keeps_metadata(public):
    dynamic = DynamicFile.read_from_fs(public / "index.html")
    embedded = embed_file(dynamic, Config(), "index.html")
    assert embedded.hash == dynamic.hash
    assert embedded.etag() == dynamic.etag()
    assert embedded.last_modified() == dynamic.last_modified()
    assert embedded.last_modified_timestamp == dynamic.last_modified_timestamp
    assert embedded.mime_type == dynamic.mime_type
    assert embedded.data == dynamic.data


def test_embed_file_rejects_missing_data(public):
    config = Config(preserve_source=False)
    stripped = open_folder(public, config=config, embed=True).get("index.html")
    with pytest.raises(ValueError):
        embed_file(stripped, Config(), "index.html")


def test_resolve_relative_path(tmp_path):
    assert resolve_folder_path("examples/public", tmp_path) == os.path.join(
        str(tmp_path), "examples/public"
    )


def test_resolve_absolute_path(tmp_path):
    target = str(tmp_path / "public")
    assert resolve_folder_path(target, "/elsewhere") == target


def test_resolve_expands_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("WEBEMBED_ROOT", str(tmp_path))
    assert resolve_folder_path("$WEBEMBED_ROOT/public") == f"{tmp_path}/public"
    assert resolve_folder_path("${WEBEMBED_ROOT}/public") == f"{tmp_path}/public"


def test_resolve_expands_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert resolve_folder_path("~/public") == f"{tmp_path}/public"


def test_resolve_undefined_variable_raises(monkeypatch):
    monkeypatch.delenv("WEBEMBED_UNSET_VARIABLE", raising=False)
    with pytest.raises(ValueError):
        resolve_folder_path("$WEBEMBED_UNSET_VARIABLE/public")


def test_open_folder_with_base_dir(public):
    folder = open_folder("public", base_dir=public.parent)
    assert folder.get("images/doc.txt").data == b"Testing 1 2 3"