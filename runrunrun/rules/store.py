"""Ordered rule storage partitioned by profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from runrunrun.constants import DEFAULT_PROFILE
from runrunrun.errors import UnknownProfileError
from runrunrun.rules.models import ConfigOrigin, Pattern, Rule, RuleOrigin


def normalize_profile(name: Optional[str]) -> str:
    if name is None or not name.strip():
        return DEFAULT_PROFILE
    return name.strip()


@dataclass
class Profile:
    name: str
    rules: list[Rule] = field(default_factory=list)


class RuleStore:
    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {DEFAULT_PROFILE: Profile(DEFAULT_PROFILE)}
        self._next_order = 0
        self._frozen = False

    def declare_profile(self, name: str) -> Profile:
        name = normalize_profile(name)
        return self._profiles.setdefault(name, Profile(name))

    def add_rule(
        self,
        pattern: Pattern,
        command_template: str,
        active_profile: str,
        origin: RuleOrigin = RuleOrigin.CONFIG,
        config_origin: Optional[ConfigOrigin] = None,
        alias: Optional[str] = None,
        imported_from: Optional[Path] = None,
    ) -> Rule:
        if self._frozen:
            raise RuntimeError("Rule store is frozen")
        profile = self.declare_profile(active_profile)
        self._next_order += 1
        rule = Rule(
            pattern=pattern,
            command_template=command_template,
            profile=profile.name,
            source_order=self._next_order,
            origin=origin,
            config_origin=config_origin,
            alias=alias,
            imported_from=imported_from,
        )
        profile.rules.append(rule)
        return rule

    def select_profile(self, name: Optional[str]) -> Profile:
        name = normalize_profile(name)
        profile = self._profiles.get(name)
        if profile is None:
            raise UnknownProfileError(name)
        return profile

    def profile_names(self) -> list[str]:
        return sorted(self._profiles)

    def freeze(self) -> None:
        self._frozen = True

    def __len__(self) -> int:
        return sum(len(profile.rules) for profile in self._profiles.values())
