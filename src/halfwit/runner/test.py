"""Test runner with log management."""

from datetime import datetime
from pathlib import Path

from halfwit.bisection.errors import TestRunnerError
from halfwit.core.log import logger
from halfwit.core.result import TestResult
from halfwit.core.runner import Runner


class TestRunner:
    """Run the test command and decide which behavior it showed.

    A non-zero exit (including a timeout) is dominant, a zero exit
    is recessive. Each run's output goes to its own log file in
    output_dir.

    Calling the runner runs the bound command and returns just the
    boolean, so an instance can be passed straight to
    Bisection.run().
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        workdir: Path,
        output_dir: Path,
        command: str | None = None,
        shell: str | None = None,
        timeout: int | None = None,
    ):
        """Initialize test runner.

        Args:
            workdir: Working directory for the test command
            output_dir: Directory for storing test logs
            command: Command used by __call__()
            shell: Shell override (platform default if None)
            timeout: Timeout in seconds, None for no limit
        """
        self.workdir = workdir
        self.output_dir = output_dir
        self.command = command
        self.shell = shell
        self.timeout = timeout
        self.runner = Runner()
        self.results: list[TestResult] = []

    def run(self, command: str) -> TestResult:
        """Run command once and save its output to a log file.

        Raises:
            TestRunnerError: If the command could not be started
        """
        iteration = len(self.results) + 1
        timestamp = datetime.now()
        log_file = self.output_dir / (
            f"test-{iteration}-{timestamp.strftime('%Y%m%d-%H%M%S')}.log"
        )
        self.output_dir.mkdir(parents=True, exist_ok=True)

        try:
            result = self.runner.execute(
                command,
                cwd=self.workdir,
                shell=self.shell,
                timeout=self.timeout,
                log_file=log_file,
                log_level="debug",
            )
        except OSError as e:
            raise TestRunnerError(
                f"Could not run test command {command!r}: {e}"
            ) from e

        test_result = TestResult(
            iteration=iteration,
            command=command,
            dominant=(result.exited != 0),
            log_file=log_file,
            returncode=result.exited,
            timestamp=timestamp,
        )
        self.results.append(test_result)

        behavior = "dominant" if test_result.dominant else "recessive"
        logger.debug(
            f"Test {iteration} exited {result.exited} ({behavior})",
            log_file=str(log_file),
        )
        return test_result

    def __call__(self) -> bool:
        if self.command is None:
            raise TestRunnerError("No test command configured")
        return self.run(self.command).dominant
