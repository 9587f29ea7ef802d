"""Find the rules of a profile matching a target, best first."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from runrunrun.aliases import AliasTable
from runrunrun.models import ResolvedCommand
from runrunrun.rules.models import PatternKind, Rule
from runrunrun.rules.store import Profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    rule: Rule
    match: re.Match[str]


class Matcher:
    """Rank matching rules by ``(kind_rank, source_order)``.

    Regex rules beat glob rules whatever their position, and among rules of
    the same kind the one declared last wins. Earlier rules are never
    discarded, they stay available as fallbacks.
    """

    def __init__(self, aliases: AliasTable) -> None:
        self.aliases = aliases

    def candidates(self, target: str, profile: Profile) -> list[Candidate]:
        found: list[Candidate] = []
        for rule in profile.rules:
            if rule.pattern.kind == PatternKind.ALIAS_REF:
                continue
            match = rule.pattern.match(target)
            if match is not None:
                found.append(Candidate(rule=rule, match=match))
        found.sort(key=lambda candidate: candidate.rule.priority_key, reverse=True)
        return found

    def command_for(self, rule: Rule) -> str:
        if rule.alias is not None:
            return self.aliases.resolve(rule.alias)
        return rule.command_template

    def iter_resolve(self, target: str, profile: Profile) -> Iterator[ResolvedCommand]:
        """Yield resolved commands lazily; aliases are looked up as each one is taken."""
        for candidate in self.candidates(target, profile):
            logger.debug(
                "matched rule for '%s': %s (%s)",
                target,
                candidate.rule.pattern.raw_text,
                candidate.rule.config_origin,
            )
            captures: tuple = ()
            if candidate.rule.pattern.kind == PatternKind.REGEX:
                # Unmatched groups are dropped, later ones move down.
                captures = tuple(
                    group for group in candidate.match.groups() if group is not None
                )
            yield ResolvedCommand(
                rule=candidate.rule,
                command_template=self.command_for(candidate.rule),
                target=target,
                captures=captures,
            )

    def resolve(self, target: str, profile: Profile) -> list[ResolvedCommand]:
        return list(self.iter_resolve(target, profile))
