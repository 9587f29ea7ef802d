from rich.console import Console

from runrunrun.errors import AllCandidatesFailedError
from runrunrun.models import ExecutionOutcome
from runrunrun.service import TargetResult
from runrunrun.tui.enums import UIStyle
from runrunrun.tui.sections import UISection
from runrunrun.tui.tables import AttemptsTable, CandidatesTable
from runrunrun.utils import compact_home_paths_in_text


class RunConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_query(self, result: TargetResult) -> None:
        # Plain lines so the output can be piped into another shell.
        for command in result.commands:
            self.console.print(command, markup=False, highlight=False, soft_wrap=True)

    def render_explain(self, result: TargetResult, profile: str) -> None:
        self.console.print(
            UISection.wrap(
                "resolution",
                CandidatesTable.summary_block(result.target, profile, len(result.candidates)),
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.wrap(
                "candidates",
                CandidatesTable.candidates_table(result.candidates),
                style=UIStyle.CYAN.value,
                subtitle="highest priority first",
            )
        )

    def render_attempts(self, outcome: ExecutionOutcome) -> None:
        if not outcome.attempts:
            return
        style = UIStyle.GREEN.value if outcome.succeeded else UIStyle.RED.value
        self.console.print(
            UISection.wrap("attempts", AttemptsTable.attempts_table(outcome), style=style)
        )

    def render_failure(self, error: AllCandidatesFailedError) -> None:
        lines = "\n".join(
            f"- {compact_home_paths_in_text(attempt.command)} ({attempt.disposition.describe()})"
            for attempt in error.attempts
        )
        self.console.print(
            UISection.note("all candidates failed", lines, style=UIStyle.RED.value, markup=False)
        )
