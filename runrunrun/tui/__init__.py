from runrunrun.tui.renderers import RunConsoleUI

__all__ = ["RunConsoleUI"]
