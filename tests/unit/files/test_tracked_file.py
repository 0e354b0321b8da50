"""Tests for TrackedFile enable/disable."""

import pytest

from halfwit.bisection import ObjectStateError, State, Stateful
from halfwit.files import TrackedFile


@pytest.fixture
def tracked(tmp_path):
    path = tmp_path / "mod.jar"
    backup = tmp_path / "backup"
    path.write_text("contents")
    backup.write_text("contents")
    return TrackedFile(path, backup)


def test_is_stateful(tracked):
    assert isinstance(tracked, Stateful)


def test_initial_state_follows_disk(tracked, tmp_path):
    assert tracked.state() is State.ENABLED
    missing = TrackedFile(tmp_path / "gone", tmp_path / "backup")
    assert missing.state() is State.DISABLED


def test_disable_removes_file(tracked):
    tracked.set_state(State.DISABLED)

    assert not tracked.path.exists()
    assert tracked.state() is State.DISABLED


def test_enable_restores_file(tracked):
    tracked.set_state(State.DISABLED)
    tracked.set_state(State.ENABLED)

    assert tracked.path.read_text() == "contents"
    assert tracked.state() is State.ENABLED


def test_enable_leaves_present_file_alone(tracked):
    """An already enabled file is not overwritten."""
    tracked.path.write_text("edited")

    tracked.set_state(State.ENABLED)
    tracked.set_state(State.ENABLED)

    assert tracked.path.read_text() == "edited"


def test_disable_twice_is_harmless(tracked):
    tracked.set_state(State.DISABLED)
    tracked.set_state(State.DISABLED)

    assert not tracked.path.exists()


def test_missing_backup_raises(tmp_path):
    tracked = TrackedFile(tmp_path / "mod.jar", tmp_path / "no-backup")

    with pytest.raises(ObjectStateError):
        tracked.set_state(State.ENABLED)
    assert tracked.state() is State.DISABLED


def test_dangling_symlink_is_toggled_as_a_link(tmp_path):
    path = tmp_path / "broken.jar"
    backup = tmp_path / "broken.backup"
    path.symlink_to("missing-target.jar")
    backup.symlink_to("missing-target.jar")
    tracked = TrackedFile(path, backup)
    assert tracked.state() is State.ENABLED

    tracked.set_state(State.DISABLED)
    assert not path.is_symlink()

    tracked.set_state(State.ENABLED)
    assert path.is_symlink()
    assert not path.exists()
