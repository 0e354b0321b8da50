"""Shell command execution built on invoke."""

import contextlib
import os
import platform
from pathlib import Path

from invoke import Context, Result
from invoke.exceptions import CommandTimedOut

from halfwit.core.log import logger


def default_shell() -> str:
    """Shell used when none is configured."""
    if platform.system() == "Windows":
        return "powershell.exe"
    return "sh"


class Runner(Context):
    """invoke.Context with an execute() method suited to running
    one test command at a time."""

    def kill(self) -> None:
        """Kill the running subprocess.

        invoke's kill() sends signal.SIGKILL, which does not exist
        on Windows. os.kill() on Windows accepts a plain number and
        terminates the process with it, so use 9 there and invoke's
        implementation everywhere else.
        """
        if platform.system() == "Windows":
            pid = self.pid if self.using_pty else self.process.pid
            with contextlib.suppress(ProcessLookupError):
                os.kill(pid, 9)
            return

        super().kill()

    def execute(
        self,
        command: str,
        cwd: Path | None = None,
        shell: str | None = None,
        timeout: int | None = None,
        log_file: Path | None = None,
        log_level: str | None = None,
    ) -> Result:
        """Execute a command with stdin closed and output captured.

        A non-zero exit is returned in the result, never raised.

        Args:
            command: Command string to execute
            cwd: Working directory for command execution
            shell: Shell to run the command with (default_shell()
                if None)
            timeout: Maximum execution time in seconds. A command
                that times out yields a result with exited == -1.
            log_file: Path to write combined stdout/stderr output
            log_level: Level at which to log each output line

        Returns:
            invoke.Result with stdout, stderr, exited (return code)

        Raises:
            OSError: If the shell itself cannot be started
        """
        kwargs = {
            "hide": True,
            "warn": True,
            "in_stream": False,
            "shell": shell or default_shell(),
        }
        if timeout:
            kwargs["timeout"] = timeout

        logger.spew(f"Running: {command}", shell=kwargs["shell"])
        try:
            if cwd:
                with self.cd(str(cwd)):
                    result = self.run(command, **kwargs)
            else:
                result = self.run(command, **kwargs)
        except CommandTimedOut as e:
            logger.warn(f"Command timed out after {timeout}s: {command}")
            result = e.result
            result.exited = -1

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            log_file.write_text(result.stdout + result.stderr)

        if log_level:
            for line in (result.stdout + result.stderr).splitlines():
                logger.log(log_level, line.rstrip())

        return result
