"""Tests for TestRunner."""

import tempfile
from pathlib import Path

import pytest

from halfwit.bisection import TestRunnerError
from halfwit.core.runner import Runner
from halfwit.runner import TestRunner


def test_successful_command_is_recessive():
    """A zero exit means the enabled files are harmless."""
    with tempfile.TemporaryDirectory() as tmpdir:
        workdir = Path(tmpdir)
        output_dir = Path(tmpdir) / "logs"

        runner = TestRunner(workdir, output_dir)
        result = runner.run("echo 'Hello World'")

        assert result.dominant is False
        assert result.returncode == 0
        assert result.log_file.exists()
        assert result.iteration == 1
        assert result.command == "echo 'Hello World'"


def test_failed_command_is_dominant():
    with tempfile.TemporaryDirectory() as tmpdir:
        workdir = Path(tmpdir)
        output_dir = Path(tmpdir) / "logs"

        runner = TestRunner(workdir, output_dir)
        result = runner.run("exit 3")

        assert result.dominant is True
        assert result.returncode == 3


def test_log_file_content():
    with tempfile.TemporaryDirectory() as tmpdir:
        workdir = Path(tmpdir)
        output_dir = Path(tmpdir) / "logs"

        runner = TestRunner(workdir, output_dir)
        result = runner.run("echo 'Test Output'; echo 'Oops' >&2")

        content = result.log_file.read_text()
        assert "Test Output" in content
        assert "Oops" in content


def test_timeout_is_dominant():
    with tempfile.TemporaryDirectory() as tmpdir:
        workdir = Path(tmpdir)
        output_dir = Path(tmpdir) / "logs"

        runner = TestRunner(workdir, output_dir, timeout=1)
        result = runner.run("sleep 10")

        assert result.dominant is True
        assert result.returncode == -1


def test_runs_in_workdir(tmp_path):
    (tmp_path / "marker.txt").write_text("here")

    runner = TestRunner(tmp_path, tmp_path / "logs")

    assert runner.run("test -f marker.txt").dominant is False
    assert runner.run("test -f missing.txt").dominant is True


def test_iterations_get_separate_logs(tmp_path):
    runner = TestRunner(tmp_path, tmp_path / "logs")

    first = runner.run("echo first")
    second = runner.run("echo second")

    assert second.iteration == 2
    assert first.log_file != second.log_file
    assert "test-1-" in first.log_file.name
    assert len(runner.results) == 2


def test_log_directory_creation(tmp_path):
    output_dir = tmp_path / "nonexistent" / "logs"

    TestRunner(tmp_path, output_dir).run("echo test")

    assert output_dir.exists()


def test_call_uses_bound_command(tmp_path):
    runner = TestRunner(tmp_path, tmp_path / "logs", command="false")
    assert runner() is True


def test_call_without_command_raises(tmp_path):
    with pytest.raises(TestRunnerError):
        TestRunner(tmp_path, tmp_path / "logs")()


def test_shell_override(tmp_path):
    runner = TestRunner(tmp_path, tmp_path / "logs", shell="/bin/sh")
    assert runner.run("true").dominant is False


def test_missing_shell_raises(tmp_path):
    runner = TestRunner(
        tmp_path, tmp_path / "logs", shell=str(tmp_path / "no-such-shell")
    )
    with pytest.raises(TestRunnerError):
        runner.run("true")


def test_execute_returns_nonzero_exit(tmp_path):
    """Runner.execute reports failures in the result instead of
    raising."""
    log_file = tmp_path / "out.log"

    result = Runner().execute(
        "echo failing; exit 4", cwd=tmp_path, log_file=log_file
    )

    assert result.exited == 4
    assert log_file.read_text().strip() == "failing"
