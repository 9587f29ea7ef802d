import logging
import signal
import subprocess
from typing import Iterable, Optional, Protocol, Sequence

from runrunrun.errors import AllCandidatesFailedError
from runrunrun.models import Attempt, ExecutionOutcome, ExitDisposition, ResolvedCommand
from runrunrun.utils import split_command

logger = logging.getLogger(__name__)

# Exit codes a POSIX shell reports for these failures.
SYNTAX_ERROR_CODE = 2
NOT_EXECUTABLE_CODE = 126
NOT_FOUND_CODE = 127


class ProcessSpawner(Protocol):
    def spawn(self, argv: Sequence[str]) -> ExitDisposition: ...


class SubprocessSpawner:
    """Start a child process and wait for it to finish."""

    def spawn(self, argv: Sequence[str]) -> ExitDisposition:
        try:
            process = subprocess.Popen(list(argv))
        except FileNotFoundError:
            return ExitDisposition.from_returncode(NOT_FOUND_CODE)
        except OSError:
            # Permission denied, exec format errors and the like.
            return ExitDisposition.from_returncode(NOT_EXECUTABLE_CODE)

        try:
            returncode = process.wait()
        except KeyboardInterrupt:
            # The child got the same SIGINT; report it the way the child ended.
            returncode = process.wait()
            if returncode >= 0:
                returncode = -signal.SIGINT
        return ExitDisposition.from_returncode(returncode)


class FallbackExecutor:
    def __init__(
        self,
        spawner: Optional[ProcessSpawner] = None,
        shell: Optional[Sequence[str]] = None,
    ) -> None:
        self.spawner = spawner or SubprocessSpawner()
        self.shell = list(shell) if shell else None

    def argv_for(self, command: str) -> list[str]:
        if self.shell is not None:
            return [*self.shell, command]
        return split_command(command)

    def attempt(self, candidate: ResolvedCommand) -> Attempt:
        command = candidate.render()
        try:
            argv = self.argv_for(command)
        except ValueError as exc:
            logger.warning("cannot tokenize '%s': %s", command, exc)
            return Attempt(
                command=command,
                argv=[],
                disposition=ExitDisposition.from_returncode(SYNTAX_ERROR_CODE),
            )
        if not argv:
            return Attempt(
                command=command,
                argv=[],
                disposition=ExitDisposition.from_returncode(SYNTAX_ERROR_CODE),
            )

        logger.info("exec '%s'", command)
        disposition = self.spawner.spawn(argv)
        return Attempt(command=command, argv=argv, disposition=disposition)

    def run(
        self, candidates: Iterable[ResolvedCommand], fallback_enabled: bool = False
    ) -> ExecutionOutcome:
        """Run the best candidate, or each in turn until one succeeds with fallback.

        Candidates are consumed lazily, so later ones are only resolved when an
        earlier one failed.
        """
        outcome = ExecutionOutcome()
        for candidate in candidates:
            attempt = self.attempt(candidate)
            outcome.attempts.append(attempt)
            if not fallback_enabled or attempt.disposition.succeeded:
                return outcome
            logger.info(
                "execution of '%s' failed (%s), continuing with next match",
                attempt.command,
                attempt.disposition.describe(),
            )

        if not outcome.attempts:
            raise ValueError("no candidate to run")
        raise AllCandidatesFailedError(outcome.attempts)
