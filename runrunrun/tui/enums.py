from enum import Enum

from runrunrun.models import DispositionKind
from runrunrun.rules.models import PatternKind


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


DISPOSITION_STYLE = {
    DispositionKind.EXITED_ZERO: UIStyle.GREEN.value,
    DispositionKind.EXITED_NON_ZERO: UIStyle.RED.value,
    DispositionKind.TERMINATED_BY_SIGNAL: UIStyle.YELLOW.value,
}

PATTERN_KIND_STYLE = {
    PatternKind.REGEX: UIStyle.MAGENTA.value,
    PatternKind.GLOB: UIStyle.CYAN.value,
}
