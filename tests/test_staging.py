"""Tests for template cloning and entry point placement."""

from __future__ import annotations

import pytest

from runbox.staging import copy_file, copy_tree, place_entry_point


def test_copy_tree_mirrors_structure(template_dir, tmp_path):
    dest = tmp_path / "dest"
    copy_tree(template_dir, dest)

    assert (dest / "helper.py").read_text(encoding="utf-8") == (template_dir / "helper.py").read_text(encoding="utf-8")
    assert (dest / "lib" / "data.txt").read_text(encoding="utf-8") == "nested\n"


def test_copy_tree_into_existing_directory(template_dir, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "keep.txt").write_text("keep", encoding="utf-8")
    copy_tree(template_dir, dest)
    assert (dest / "keep.txt").exists()
    assert (dest / "lib" / "data.txt").exists()


def test_copy_tree_missing_source(tmp_path):
    with pytest.raises(OSError):
        copy_tree(tmp_path / "missing", tmp_path / "dest")


def test_copy_file_preserves_mode(tmp_path):
    src = tmp_path / "run.sh"
    src.write_bytes(b"#!/bin/sh\necho hi\n")
    src.chmod(0o750)
    dst = tmp_path / "copy.sh"
    copy_file(src, dst)
    assert dst.read_bytes() == b"#!/bin/sh\necho hi\n"
    assert dst.stat().st_mode & 0o777 == 0o750


def test_place_entry_point_writes_text_and_bytes(tmp_path):
    entry = place_entry_point("console.log('é')", tmp_path, "index.js")
    assert entry == tmp_path / "index.js"
    assert entry.read_bytes() == "console.log('é')".encode("utf-8")

    raw = place_entry_point(b"\x00\x01", tmp_path, "raw.bin")
    assert raw.read_bytes() == b"\x00\x01"


def test_place_entry_point_rejects_paths(tmp_path):
    with pytest.raises(ValueError):
        place_entry_point("x", tmp_path, "../escape.js")
