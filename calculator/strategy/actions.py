"""Player actions and the table cells that encode them."""

from dataclasses import dataclass
from enum import Enum, auto

from calculator.errors import StrategyFileError


class Action(Enum):
    """Possible player actions."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()
    SURRENDER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Requirement(Enum):
    """What a conditional cell needs before its primary action is allowed."""

    DOUBLE = auto()
    DOUBLE_AFTER_SPLIT = auto()
    SURRENDER = auto()


@dataclass(frozen=True, slots=True)
class PlainAction:
    """A cell that always recommends the same action."""

    action: Action

    @property
    def code(self) -> str:
        return code_for(self)


@dataclass(frozen=True, slots=True)
class ConditionalAction:
    """A cell whose primary action falls back when its requirement fails."""

    primary: Action
    fallback: Action
    requires: Requirement

    @property
    def code(self) -> str:
        return code_for(self)


Cell = PlainAction | ConditionalAction


H = PlainAction(Action.HIT)
S = PlainAction(Action.STAND)
P = PlainAction(Action.SPLIT)
D = ConditionalAction(Action.DOUBLE, Action.HIT, Requirement.DOUBLE)
Ds = ConditionalAction(Action.DOUBLE, Action.STAND, Requirement.DOUBLE)
Ph = ConditionalAction(Action.SPLIT, Action.HIT, Requirement.DOUBLE_AFTER_SPLIT)
Rh = ConditionalAction(Action.SURRENDER, Action.HIT, Requirement.SURRENDER)
Rs = ConditionalAction(Action.SURRENDER, Action.STAND, Requirement.SURRENDER)
Rp = ConditionalAction(Action.SURRENDER, Action.SPLIT, Requirement.SURRENDER)

# Chart codes, as used in strategy chart files
CELLS: dict[str, Cell] = {
    "H": H,
    "S": S,
    "P": P,
    "D": D,
    "Ds": Ds,
    "Ph": Ph,
    "Rh": Rh,
    "Rs": Rs,
    "Rp": Rp,
}

_CODES: dict[Cell, str] = {cell: code for code, cell in CELLS.items()}

# Older charts write late surrender-or-hit as "Su"
_ALIASES = {"Su": "Rh"}

ACTION_LEGEND = {
    "H": "Hit",
    "S": "Stand",
    "P": "Split",
    "D": "Double if allowed, otherwise Hit",
    "Ds": "Double if allowed, otherwise Stand",
    "Ph": "Split if double after split is allowed, otherwise Hit",
    "Rh": "Surrender if allowed, otherwise Hit",
    "Rs": "Surrender if allowed, otherwise Stand",
    "Rp": "Surrender if allowed, otherwise Split",
}


def cell_from_code(code: str) -> Cell:
    """Parse a chart code such as 'Ds' into a cell."""
    code = code.strip()
    code = _ALIASES.get(code, code)
    try:
        return CELLS[code]
    except KeyError:
        raise StrategyFileError(f"Unknown action code: {code}") from None


def code_for(cell: Cell) -> str:
    """Return the chart code of a cell."""
    try:
        return _CODES[cell]
    except KeyError:
        raise ValueError(f"No chart code for {cell!r}") from None
