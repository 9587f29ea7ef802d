import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Optional

from runrunrun.errors import NoMatchError
from runrunrun.executor import FallbackExecutor
from runrunrun.loader import LoadedConfig
from runrunrun.matcher import Candidate, Matcher
from runrunrun.models import ExecutionOutcome

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    EXECUTE = "execute"
    DRY_RUN = "dry_run"
    QUERY = "query"


@dataclass
class TargetResult:
    target: str
    candidates: list[Candidate]
    commands: list[str] = field(default_factory=list)
    outcome: Optional[ExecutionOutcome] = None


class RunService:
    def __init__(
        self,
        config: LoadedConfig,
        profile: Optional[str] = None,
        fallback: bool = False,
        mode: RunMode = RunMode.EXECUTE,
        executor: Optional[FallbackExecutor] = None,
    ) -> None:
        self.config = config
        self.profile = config.profile(profile)
        self.fallback = fallback
        self.mode = mode
        self.matcher = Matcher(config.aliases)
        self.executor = executor or FallbackExecutor()

    def process(self, target: str) -> TargetResult:
        candidates = self.matcher.candidates(target, self.profile)
        if not candidates:
            raise NoMatchError(target)

        limit = None if self.fallback else 1
        resolved = islice(self.matcher.iter_resolve(target, self.profile), limit)
        result = TargetResult(target=target, candidates=candidates)

        if self.mode != RunMode.EXECUTE:
            result.commands = [command.render() for command in resolved]
            for command in result.commands:
                logger.info("%s '%s'", self.mode.value.replace("_", "-"), command)
            return result

        result.outcome = self.executor.run(resolved, fallback_enabled=self.fallback)
        result.commands = [attempt.command for attempt in result.outcome.attempts]
        return result
