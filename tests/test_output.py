import asyncio

import pytest

from inkwell import output
from inkwell.errors import SiteIOError


def test_ensure_output_dir_creates_parents_and_is_idempotent(tmp_path):
    target = tmp_path / "deep" / "public"
    asyncio.run(output.ensure_output_dir(target))
    assert target.is_dir()
    (target / "keep.html").write_text("x", encoding="utf-8")
    asyncio.run(output.ensure_output_dir(target))
    assert (target / "keep.html").exists()


def test_ensure_output_dir_fails_when_path_is_a_file(tmp_path):
    target = tmp_path / "public"
    target.write_text("not a directory", encoding="utf-8")
    with pytest.raises(SiteIOError):
        asyncio.run(output.ensure_output_dir(target))


def test_purge_only_removes_matching_files_at_top_level(tmp_path):
    (tmp_path / "old.html").write_text("old", encoding="utf-8")
    (tmp_path / "UPPER.HTML").write_text("old", encoding="utf-8")
    (tmp_path / "old.css").write_text("css", encoding="utf-8")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "nested.html").write_text("keep", encoding="utf-8")

    removed = asyncio.run(output.purge(tmp_path, ".html"))

    assert sorted(removed) == ["UPPER.HTML", "old.html"]
    assert not (tmp_path / "old.html").exists()
    assert not (tmp_path / "UPPER.HTML").exists()
    assert (tmp_path / "old.css").exists()
    assert (tmp_path / "assets" / "nested.html").exists()


def test_purge_failure_fails_whole_purge(monkeypatch, tmp_path):
    (tmp_path / "a.html").write_text("a", encoding="utf-8")
    (tmp_path / "b.html").write_text("b", encoding="utf-8")
    original_unlink = output.Path.unlink

    def flaky_unlink(self, *args, **kwargs):
        if self.name == "b.html":
            raise PermissionError(13, "Permission denied")
        return original_unlink(self, *args, **kwargs)

    monkeypatch.setattr(output.Path, "unlink", flaky_unlink)
    with pytest.raises(SiteIOError) as excinfo:
        asyncio.run(output.purge(tmp_path, ".html"))
    assert excinfo.value.path == tmp_path / "b.html"
    assert "Permission denied" in str(excinfo.value)


def test_write_creates_and_overwrites(tmp_path):
    target = tmp_path / "page.html"
    asyncio.run(output.write(target, "first version that is long"))
    asyncio.run(output.write(target, "second"))
    assert target.read_text(encoding="utf-8") == "second"


def test_write_failure_raises_site_io_error(tmp_path):
    with pytest.raises(SiteIOError):
        asyncio.run(output.write(tmp_path / "missing" / "page.html", "x"))
