"""Published basic strategy tables for single deck, double deck and 4-8 deck shoes."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from calculator.strategy.actions import Cell, H, S, P, D, Ds, Ph, Rh, Rs, Rp
from calculator.strategy.rules import RuleSet

# Dealer upcards in column order: 2, 3, 4, 5, 6, 7, 8, 9, 10, A(11)
DEALER_UPCARDS: tuple[int, ...] = tuple(range(2, 12))

HARD_TOTALS = range(4, 22)
SOFT_TOTALS = range(12, 22)
PAIR_VALUES = range(2, 12)

TableKey = tuple[int, int]  # (total or pair value, dealer upcard)


@dataclass(frozen=True)
class StrategyTables:
    """
    The three lookup tables, keyed by (total or pair value, dealer upcard).

    Tables are stored as read-only mappings; strategies are shared between
    callers once built.
    """

    hard: Mapping[TableKey, Cell] = field(default_factory=dict)
    soft: Mapping[TableKey, Cell] = field(default_factory=dict)
    pair: Mapping[TableKey, Cell] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("hard", "soft", "pair"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def row(self, kind: str, key: int) -> list[Cell] | None:
        """Return a table row in dealer column order, or None if incomplete."""
        table = self.table(kind)
        cells = [table.get((key, up)) for up in DEALER_UPCARDS]
        if any(cell is None for cell in cells):
            return None
        return cells

    def table(self, kind: str) -> Mapping[TableKey, Cell]:
        if kind == "hard":
            return self.hard
        if kind == "soft":
            return self.soft
        if kind == "pair":
            return self.pair
        raise ValueError(f"Unknown table: {kind}")


def _set_row(table: dict[TableKey, Cell], key: int, cells: Sequence[Cell]) -> None:
    if len(cells) != len(DEALER_UPCARDS):
        raise ValueError(f"Row {key} needs {len(DEALER_UPCARDS)} cells, got {len(cells)}")
    for dealer, cell in zip(DEALER_UPCARDS, cells):
        table[(key, dealer)] = cell


def build_hard_table(rules: RuleSet) -> dict[TableKey, Cell]:
    """Build hard totals strategy table."""
    h17 = rules.dealer_hits_soft_17
    single = rules.num_decks == 1
    few_decks = rules.num_decks <= 2
    table: dict[TableKey, Cell] = {}

    # Hard 4-7: Always hit
    for total in range(4, 8):
        _set_row(table, total, [H] * 10)

    #                 2   3   4   5   6   7   8   9   10  A
    if single:
        _set_row(table, 8, [H, H, H, D, D, H, H, H, H, H])
    else:
        _set_row(table, 8, [H] * 10)
    _set_row(table, 9, [D if few_decks else H, D, D, D, D, H, H, H, H, H])
    _set_row(table, 10, [D, D, D, D, D, D, D, D, H, H])
    _set_row(table, 11, [D, D, D, D, D, D, D, D, D, D if h17 or few_decks else H])
    _set_row(table, 12, [H, H, S, S, S, H, H, H, H, H])
    _set_row(table, 13, [S, S, S, S, S, H, H, H, H, H])
    _set_row(table, 14, [S, S, S, S, S, H, H, H, H, H])
    _set_row(table, 15, [S, S, S, S, S, H, H, H, Rh, Rh if h17 else H])
    _set_row(table, 16, [S, S, S, S, S, H, H, H if single else Rh, Rh, Rh])
    _set_row(table, 17, [S, S, S, S, S, S, S, S, S, Rs if h17 else S])

    # Hard 18+: Always stand
    for total in range(18, 22):
        _set_row(table, total, [S] * 10)

    if not rules.dealer_peeks:
        # No hole card: no doubling 11 against a 10 or Ace
        table[(11, 10)] = H
        table[(11, 11)] = H

    return table


def build_soft_table(rules: RuleSet) -> dict[TableKey, Cell]:
    """Build soft totals strategy table."""
    h17 = rules.dealer_hits_soft_17
    single = rules.num_decks == 1
    table: dict[TableKey, Cell] = {}

    #                  2   3   4   5   6   7   8   9   10  A
    _set_row(table, 12, [H, H, H, H, H, H, H, H, H, H])  # A,A when not split
    if single:
        _set_row(table, 13, [H, H, D, D, D, H, H, H, H, H])
        _set_row(table, 14, [H, H, D, D, D, H, H, H, H, H])
    else:
        _set_row(table, 13, [H, H, H, D, D, H, H, H, H, H])
        _set_row(table, 14, [H, H, H, D, D, H, H, H, H, H])
    _set_row(table, 15, [H, H, D, D, D, H, H, H, H, H])
    _set_row(table, 16, [H, H, D, D, D, H, H, H, H, H])
    _set_row(table, 17, [D if single else H, D, D, D, D, H, H, H, H, H])
    _set_row(
        table, 18,
        [Ds if h17 else S, Ds, Ds, Ds, Ds, S, S, H, H, S if single and not h17 else H],
    )
    _set_row(table, 19, [S, S, S, S, Ds if h17 or single else S, S, S, S, S, S])
    _set_row(table, 20, [S] * 10)
    _set_row(table, 21, [S] * 10)

    return table


def build_pair_table(rules: RuleSet) -> dict[TableKey, Cell]:
    """Build pair splitting strategy table."""
    h17 = rules.dealer_hits_soft_17
    single = rules.num_decks == 1
    few_decks = rules.num_decks <= 2
    table: dict[TableKey, Cell] = {}

    #                  2   3   4   5   6   7   8   9   10  A
    if few_decks:
        _set_row(table, 2, [Ph, P, P, P, P, P, H, H, H, H])
        _set_row(table, 6, [P, P, P, P, P, Ph, H, H, H, H])
    else:
        _set_row(table, 2, [Ph, Ph, P, P, P, P, H, H, H, H])
        _set_row(table, 6, [Ph, P, P, P, P, H, H, H, H, H])

    if single:
        _set_row(table, 3, [Ph, Ph, P, P, P, P, Ph, H, H, H])
        if rules.double_after_split:
            _set_row(table, 4, [H, H, P, P, P, H, H, H, H, H])
        else:
            _set_row(table, 4, [H, H, H, D, D, H, H, H, H, H])  # Play as hard 8
        _set_row(table, 7, [P, P, P, P, P, P, Ph, H, Rs, H])
    else:
        _set_row(table, 3, [Ph, Ph, P, P, P, P, H, H, H, H])
        _set_row(table, 4, [H, H, H, Ph, Ph, H, H, H, H, H])
        if few_decks:
            _set_row(table, 7, [P, P, P, P, P, P, Ph, H, H, H])
        else:
            _set_row(table, 7, [P, P, P, P, P, P, H, H, H, H])

    _set_row(table, 5, [D, D, D, D, D, D, D, D, H, H])  # Never split, play as 10
    _set_row(table, 8, [P, P, P, P, P, P, P, P, P, Rp if h17 and not single else P])
    _set_row(table, 9, [P, P, P, P, P, S, P, P, S, S])
    _set_row(table, 10, [S] * 10)  # Never split tens
    _set_row(table, 11, [P] * 10)

    if not rules.dealer_peeks:
        # No hole card: no splitting 8s against a 10 or Ace, or Aces against an Ace
        table[(8, 10)] = H
        table[(8, 11)] = H
        table[(11, 11)] = H

    return table


def build_tables(rules: RuleSet) -> StrategyTables:
    """Build all three tables for a rule set."""
    return StrategyTables(
        hard=build_hard_table(rules),
        soft=build_soft_table(rules),
        pair=build_pair_table(rules),
    )
