"""Unit tests for file tree rendering."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from stencil.core.errors import RenderError
from stencil.core.render import (
    read_modes,
    read_tree,
    render_file,
    render_files,
    render_text,
    write_tree,
)


class TestRenderText:
    def test_output_tag(self) -> None:
        assert render_text("Hello, <%= projectName %>", {"projectName": "World"}) == "Hello, World"

    def test_blocks_and_comments(self) -> None:
        text = "<%# header %><% if docker %>FROM python<% else %>none<% endif %>"
        assert render_text(text, {"docker": True}) == "FROM python"
        assert render_text(text, {"docker": False}) == "none"

    def test_curly_braces_untouched(self) -> None:
        text = "name: <%= name %>\nrun: ${{ github.sha }} {% raw %}"
        assert render_text(text, {"name": "ci"}) == "name: ci\nrun: ${{ github.sha }} {% raw %}"

    def test_keeps_trailing_newline(self) -> None:
        assert render_text("<%= a %>\n", {"a": 1}) == "1\n"

    def test_no_escaping(self) -> None:
        assert render_text("<%= html %>", {"html": "<b>&</b>"}) == "<b>&</b>"

    def test_unusual_answer_keys(self) -> None:
        data = {"self": "me", 1: "one", "projectName": "demo"}
        assert render_text("<%= self %>/<%= projectName %>", data) == "me/demo"


class TestRenderFile:
    def test_undefined_name_is_annotated(self) -> None:
        with pytest.raises(RenderError) as exc:
            render_file("a.tpl", b"<%= missing %>", {})
        assert str(exc.value).startswith("[a.tpl] ")
        assert "missing" in str(exc.value)

    def test_syntax_error_is_annotated(self) -> None:
        with pytest.raises(RenderError, match=r"^\[src/main.py\] "):
            render_file("src/main.py", b"<% if %>", {})

    def test_dash_tag_is_whitespace_control(self) -> None:
        assert render_text("a\n<%- if on %>b<% endif %>", {"on": True}) == "ab"
        with pytest.raises(RenderError, match="unknown tag"):
            render_file("README.md", b"<%- name %>", {"name": "demo"})

    def test_binary_passes_through(self) -> None:
        content = b"\x89PNG\r\n\x1a\n\xff\xfe<%= x %>"
        assert render_file("logo.png", content, {}) is content


class TestRenderFiles:
    @pytest.mark.asyncio
    async def test_renders_every_file_in_place(self) -> None:
        files = {
            "README.md": b"# <%= projectName %>\n",
            "src/app.py": b"NAME = '<%= projectName %>'\n",
            "static.txt": b"plain\n",
        }

        result = await render_files(files, {"projectName": "demo"})

        assert result is files
        assert files == {
            "README.md": b"# demo\n",
            "src/app.py": b"NAME = 'demo'\n",
            "static.txt": b"plain\n",
        }

    @pytest.mark.asyncio
    async def test_one_failure_fails_the_stage(self) -> None:
        files = {"ok.txt": b"<%= a %>", "bad.txt": b"<%= b %>"}

        with pytest.raises(RenderError, match=r"^\[bad.txt\] "):
            await render_files(files, {"a": 1})

        # Failing stage leaves the tree as it was
        assert files["ok.txt"] == b"<%= a %>"

    def test_runs_under_asyncio_run(self) -> None:
        files = {f"f{i}.txt": b"<%= n %>" for i in range(50)}
        asyncio.run(render_files(files, {"n": 7}))
        assert set(files.values()) == {b"7"}


class TestTreeIO:
    def test_read_tree_uses_posix_keys(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "a" / "b" / "c.txt").write_bytes(b"c")
        (tmp_path / "top.txt").write_bytes(b"t")

        assert read_tree(tmp_path) == {"a/b/c.txt": b"c", "top.txt": b"t"}

    def test_write_tree_is_non_destructive(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "keep.txt").write_text("mine")
        (dest / "README.md").write_text("old")

        write_tree({"README.md": b"new", "src/x.py": b"x"}, dest)

        assert (dest / "keep.txt").read_text() == "mine"
        assert (dest / "README.md").read_text() == "new"
        assert (dest / "src" / "x.py").read_text() == "x"

    def test_write_tree_creates_destination(self, tmp_path: Path) -> None:
        dest = tmp_path / "fresh" / "project"
        write_tree({"a.txt": b"a"}, dest)
        assert (dest / "a.txt").read_bytes() == b"a"

    def test_modes_round_trip(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        (src / "bin").mkdir(parents=True)
        (src / "bin" / "gradlew").write_bytes(b"#!/bin/sh\n")
        (src / "bin" / "gradlew").chmod(0o750)
        (src / "README.md").write_bytes(b"r")
        (src / "README.md").chmod(0o644)

        modes = read_modes(src)
        assert modes == {"bin/gradlew": 0o750, "README.md": 0o644}

        dest = tmp_path / "dest"
        write_tree(read_tree(src), dest, modes)
        assert (dest / "bin" / "gradlew").stat().st_mode & 0o777 == 0o750
        assert (dest / "README.md").stat().st_mode & 0o777 == 0o644

    def test_write_tree_chmods_overwritten_files(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "run.sh").write_text("old")
        (dest / "run.sh").chmod(0o644)

        write_tree({"run.sh": b"new"}, dest, {"run.sh": 0o755})

        assert (dest / "run.sh").read_text() == "new"
        assert (dest / "run.sh").stat().st_mode & 0o777 == 0o755
