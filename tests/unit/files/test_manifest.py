"""Tests for Manifest backup and restore."""

import json
from pathlib import Path

import pytest

from halfwit.bisection import State
from halfwit.files import Manifest


@pytest.fixture
def files(tmp_path):
    paths = []
    for name in ["one.txt", "two.txt", "three.txt"]:
        path = tmp_path / "work" / name
        path.parent.mkdir(exist_ok=True)
        path.write_text(f"{name} contents")
        paths.append(path)
    return paths


def test_create_backs_up_every_file(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")

    tracked = manifest.create(files)

    assert [t.path for t in tracked] == files
    for entry, path in zip(manifest.entries, files, strict=True):
        backup = manifest.backup_dir / entry.id
        assert backup.read_text() == path.read_text()


def test_manifest_file_lists_entries(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")
    manifest.create(files)

    data = json.loads(manifest.manifest_file.read_text())

    assert [entry["path"] for entry in data["entries"]] == [
        str(path) for path in files
    ]


def test_create_wipes_old_backups(tmp_path, files):
    backup_dir = tmp_path / ".halfwit"
    backup_dir.mkdir()
    (backup_dir / "stale").write_text("old")

    Manifest(backup_dir).create(files)

    assert not (backup_dir / "stale").exists()


def test_restore_all_brings_back_removed_files(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")
    tracked = manifest.create(files)
    for t in tracked:
        t.set_state(State.DISABLED)

    manifest.restore_all()

    for path in files:
        assert path.read_text() == f"{path.name} contents"


def test_restore_all_undoes_edits(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")
    manifest.create(files)
    files[0].write_text("changed by test")

    manifest.restore_all()
    manifest.restore_all()

    assert files[0].read_text() == "one.txt contents"


def test_restore_all_continues_after_failure(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")
    manifest.create(files)
    (manifest.backup_dir / manifest.entries[0].id).unlink()
    files[2].unlink()

    with pytest.raises(OSError):
        manifest.restore_all()

    assert files[2].exists()


def test_symlinks_restored_as_symlinks(tmp_path, files):
    link = tmp_path / "work" / "link.txt"
    link.symlink_to("one.txt")
    manifest = Manifest(tmp_path / ".halfwit")
    tracked = manifest.create([link])

    tracked[0].set_state(State.DISABLED)
    assert not link.is_symlink()
    manifest.restore_all()

    assert link.is_symlink()
    assert link.readlink() == Path("one.txt")
    assert link.read_text() == "one.txt contents"


def test_restore_all_replaces_link_with_backed_up_file(tmp_path, files):
    manifest = Manifest(tmp_path / ".halfwit")
    manifest.create([files[0]])
    files[0].unlink()
    files[0].symlink_to("two.txt")

    manifest.restore_all()

    assert not files[0].is_symlink()
    assert files[0].read_text() == "one.txt contents"
    assert files[1].read_text() == "two.txt contents"
