import asyncio
import os

import pytest

from inkwell import store
from inkwell.errors import SiteIOError


def test_list_document_files_filters_and_sorts(tmp_path):
    (tmp_path / "b.md").write_text("b", encoding="utf-8")
    (tmp_path / "a.MD").write_text("a", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    (tmp_path / "folder.md").mkdir()
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "deep.md").write_text("d", encoding="utf-8")

    names = asyncio.run(store.list_document_files(tmp_path, ".md"))
    assert names == ["a.MD", "b.md"]

    everything = asyncio.run(store.list_document_files(tmp_path))
    assert everything == ["a.MD", "b.md", "notes.txt"]


def test_list_document_files_skips_symlinked_directories(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "post.md").write_text("x", encoding="utf-8")
    try:
        os.symlink(tmp_path / "real", tmp_path / "link.md")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    assert asyncio.run(store.list_document_files(tmp_path, ".md")) == ["post.md"]


def test_list_document_files_missing_directory(tmp_path):
    with pytest.raises(SiteIOError) as excinfo:
        asyncio.run(store.list_document_files(tmp_path / "missing", ".md"))
    assert excinfo.value.path == tmp_path / "missing"
    assert isinstance(excinfo.value.original_error, OSError)


def test_read_document_files_keeps_input_order_when_reads_finish_out_of_order(
    monkeypatch, tmp_path
):
    delays = {"a.md": 0.02, "b.md": 0.04, "c.md": 0.0}
    finished = []

    async def slow_read(dir_path, name):
        await asyncio.sleep(delays[name])
        finished.append(name)
        return f"content of {name}"

    monkeypatch.setattr(store, "read_document_file", slow_read)
    contents = asyncio.run(
        store.read_document_files(tmp_path, ["a.md", "b.md", "c.md"])
    )

    assert finished == ["c.md", "a.md", "b.md"]
    assert contents == ["content of a.md", "content of b.md", "content of c.md"]


def test_read_document_files_reads_utf8(tmp_path):
    (tmp_path / "one.md").write_text("héllo", encoding="utf-8")
    (tmp_path / "two.md").write_text("wörld", encoding="utf-8")
    contents = asyncio.run(store.read_document_files(tmp_path, ["two.md", "one.md"]))
    assert contents == ["wörld", "héllo"]


def test_read_document_files_fails_whole_batch(tmp_path):
    (tmp_path / "ok.md").write_text("fine", encoding="utf-8")
    (tmp_path / "latin1.md").write_bytes("caf\xe9".encode("latin-1"))

    with pytest.raises(SiteIOError, match="UTF-8"):
        asyncio.run(store.read_document_files(tmp_path, ["ok.md", "latin1.md"]))

    with pytest.raises(SiteIOError) as excinfo:
        asyncio.run(store.read_document_files(tmp_path, ["ok.md", "gone.md"]))
    assert excinfo.value.path == tmp_path / "gone.md"
