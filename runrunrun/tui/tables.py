from rich.table import Column, Table
from rich.text import Text

from runrunrun.matcher import Candidate
from runrunrun.models import ExecutionOutcome
from runrunrun.tui.enums import DISPOSITION_STYLE, PATTERN_KIND_STYLE, UIStyle
from runrunrun.utils import compact_home_path


class CandidatesTable:
    @staticmethod
    def summary_block(target: str, profile: str, count: int) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Target", Text(target))
        table.add_row("Profile", profile)
        table.add_row("Candidates", str(count))
        return table

    @staticmethod
    def candidates_table(candidates: list[Candidate]) -> Table:
        table = Table(
            Column(header="#", width=3),
            Column(header="Kind", width=6),
            Column(header="Order", width=6),
            Column(header="Pattern", overflow="ellipsis", max_width=40),
            Column(header="Command", overflow="ellipsis"),
            Column(header="Origin", overflow="ellipsis", max_width=42),
            expand=True,
            header_style="bold",
        )

        for index, candidate in enumerate(candidates, start=1):
            rule = candidate.rule
            kind_style = PATTERN_KIND_STYLE.get(rule.pattern.kind, UIStyle.WHITE.value)
            kind_text = Text(rule.pattern.kind.value, style=kind_style)
            command = f"[{rule.alias}]" if rule.alias else rule.command_template
            origin = ""
            if rule.imported_from is not None:
                origin = compact_home_path(rule.imported_from)
            elif rule.config_origin is not None:
                origin = compact_home_path(str(rule.config_origin))
            marker = Text("*" if index == 1 else str(index), style="bold" if index == 1 else "")
            table.add_row(
                marker,
                kind_text,
                str(rule.source_order),
                Text(rule.pattern.raw_text),
                Text(command),
                Text(origin, style=UIStyle.DIM.value),
            )
        return table


class AttemptsTable:
    @staticmethod
    def attempts_table(outcome: ExecutionOutcome) -> Table:
        table = Table(
            Column(header="#", width=3),
            Column(header="Command", overflow="ellipsis"),
            Column(header="Result", width=24),
            expand=True,
            header_style="bold",
        )
        for index, attempt in enumerate(outcome.attempts, start=1):
            style = DISPOSITION_STYLE.get(attempt.disposition.kind, UIStyle.WHITE.value)
            table.add_row(
                str(index),
                Text(attempt.command),
                Text(attempt.disposition.describe(), style=style),
            )
        return table
