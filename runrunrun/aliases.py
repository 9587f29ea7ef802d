"""Alias table shared by every profile of a loaded configuration."""

from __future__ import annotations

from runrunrun.errors import UndefinedAliasError
from runrunrun.rules.models import Alias


class AliasTable:
    """Named command templates referenced as ``[name]`` in rule commands.

    Lookups happen when a rule is selected, not when it is parsed, so a rule
    may reference an alias defined further down the configuration. The last
    definition of a name wins everywhere. Templates are returned as-is: an
    alias whose template looks like ``[other]`` is not expanded again.
    """

    def __init__(self) -> None:
        self._aliases: dict[str, Alias] = {}
        self._frozen = False

    def define(self, name: str, command_template: str) -> None:
        if self._frozen:
            raise RuntimeError("Alias table is frozen")
        self._aliases[name] = Alias(name=name, command_template=command_template)

    def resolve(self, name: str) -> str:
        alias = self._aliases.get(name)
        if alias is None:
            raise UndefinedAliasError(name)
        return alias.command_template

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)

    def list_aliases(self) -> list[Alias]:
        return sorted(self._aliases.values(), key=lambda alias: alias.name)
