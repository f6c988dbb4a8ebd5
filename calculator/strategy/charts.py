"""Strategy charts stored as JSON documents."""

from pathlib import Path
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, ValidationError, field_validator

from calculator.errors import StrategyFileError
from calculator.strategy.actions import ACTION_LEGEND, Cell, cell_from_code
from calculator.strategy.basic import BasicStrategy
from calculator.strategy.rules import RuleSet, SurrenderRule
from calculator.strategy.tables import (
    DEALER_UPCARDS,
    HARD_TOTALS,
    PAIR_VALUES,
    SOFT_TOTALS,
    StrategyTables,
    TableKey,
)

_NIL_UUID = UUID(int=0)


def _check_codes(actions: list[str]) -> list[str]:
    for code in actions:
        cell_from_code(code)
    return actions


class ChartRules(BaseModel):
    """Rule block of a chart file."""

    decks: int = Field(..., ge=1, le=8)
    dealer_stands_on_soft_17: bool
    double_after_split: bool
    dealer_peak: bool = True
    surrender_allowed: SurrenderRule = SurrenderRule.NOT_ALLOWED


class HardHandRow(BaseModel):
    """Actions for one hard total, dealer 2 through A."""

    total: int = Field(..., ge=min(HARD_TOTALS), le=max(HARD_TOTALS))
    actions: list[str] = Field(..., min_length=10, max_length=10)

    @field_validator("actions")
    @classmethod
    def known_codes(cls, actions: list[str]) -> list[str]:
        return _check_codes(actions)


class SoftHandRow(BaseModel):
    """Actions for one soft total, dealer 2 through A."""

    total: int = Field(..., ge=min(SOFT_TOTALS), le=max(SOFT_TOTALS))
    actions: list[str] = Field(..., min_length=10, max_length=10)

    @field_validator("actions")
    @classmethod
    def known_codes(cls, actions: list[str]) -> list[str]:
        return _check_codes(actions)


class PairRow(BaseModel):
    """Actions for one pair (by card value, Ace = 11), dealer 2 through A."""

    pair: int = Field(..., ge=min(PAIR_VALUES), le=max(PAIR_VALUES))
    actions: list[str] = Field(..., min_length=10, max_length=10)

    @field_validator("actions")
    @classmethod
    def known_codes(cls, actions: list[str]) -> list[str]:
        return _check_codes(actions)


def _check_unique(rows: list, attr: str) -> list:
    seen = set()
    for row in rows:
        key = getattr(row, attr)
        if key in seen:
            raise ValueError(f"Duplicate row for {attr} {key}")
        seen.add(key)
    return rows


class ChartTables(BaseModel):
    """Hard, soft and pair tables of a chart file."""

    hard_hands: list[HardHandRow] = Field(default_factory=list)
    soft_hands: list[SoftHandRow] = Field(default_factory=list)
    pair_hands: list[PairRow] = Field(default_factory=list)

    @field_validator("hard_hands", "soft_hands")
    @classmethod
    def unique_totals(cls, rows: list) -> list:
        return _check_unique(rows, "total")

    @field_validator("pair_hands")
    @classmethod
    def unique_pairs(cls, rows: list) -> list:
        return _check_unique(rows, "pair")


def _rows_to_table(rows: list[tuple[int, list[str]]]) -> dict[TableKey, Cell]:
    table: dict[TableKey, Cell] = {}
    for key, actions in rows:
        for dealer, code in zip(DEALER_UPCARDS, actions):
            table[(key, dealer)] = cell_from_code(code)
    return table


def _table_to_rows(tables: StrategyTables, kind: str, keys: range) -> list[tuple[int, list[str]]]:
    rows = []
    for key in keys:
        cells = tables.row(kind, key)
        if cells is not None:
            rows.append((key, [cell.code for cell in cells]))
    return rows


class StrategyChart(BaseModel):
    """A complete basic strategy chart for one set of table rules."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    rules: ChartRules
    tables: ChartTables
    action_legend: dict[str, str] = Field(default_factory=dict)

    @field_validator("id")
    @classmethod
    def replace_nil_id(cls, value: UUID) -> UUID:
        return uuid4() if value == _NIL_UUID else value

    @classmethod
    def from_json(cls, text: str | bytes) -> "StrategyChart":
        """Parse a chart from a JSON string."""
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise StrategyFileError(f"Invalid strategy chart: {exc}") from exc

    @classmethod
    def from_file(cls, path: str | Path) -> "StrategyChart":
        """Load a chart from a JSON file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StrategyFileError(f"Cannot read strategy chart {path}: {exc}") from exc
        try:
            return cls.from_json(text)
        except StrategyFileError as exc:
            raise StrategyFileError(f"{path}: {exc}") from exc

    @classmethod
    def from_strategy(
        cls,
        strategy: BasicStrategy,
        name: str,
        description: str = "",
    ) -> "StrategyChart":
        """Export a strategy's tables and rules as a chart."""
        rules = strategy.rules
        tables = strategy.tables
        return cls(
            name=name,
            description=description,
            rules=ChartRules(
                decks=rules.num_decks,
                dealer_stands_on_soft_17=not rules.dealer_hits_soft_17,
                double_after_split=rules.double_after_split,
                dealer_peak=rules.dealer_peeks,
                surrender_allowed=rules.surrender,
            ),
            tables=ChartTables(
                hard_hands=[
                    HardHandRow(total=total, actions=actions)
                    for total, actions in _table_to_rows(tables, "hard", HARD_TOTALS)
                ],
                soft_hands=[
                    SoftHandRow(total=total, actions=actions)
                    for total, actions in _table_to_rows(tables, "soft", SOFT_TOTALS)
                ],
                pair_hands=[
                    PairRow(pair=pair, actions=actions)
                    for pair, actions in _table_to_rows(tables, "pair", PAIR_VALUES)
                ],
            ),
            action_legend=dict(ACTION_LEGEND),
        )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    def rule_set(self) -> RuleSet:
        """The table rules this chart was built for."""
        return RuleSet(
            num_decks=self.rules.decks,
            dealer_hits_soft_17=not self.rules.dealer_stands_on_soft_17,
            double_after_split=self.rules.double_after_split,
            dealer_peeks=self.rules.dealer_peak,
            surrender=self.rules.surrender_allowed,
        )

    def to_tables(self) -> StrategyTables:
        return StrategyTables(
            hard=_rows_to_table([(r.total, r.actions) for r in self.tables.hard_hands]),
            soft=_rows_to_table([(r.total, r.actions) for r in self.tables.soft_hands]),
            pair=_rows_to_table([(r.pair, r.actions) for r in self.tables.pair_hands]),
        )

    def to_strategy(self, rules: RuleSet | None = None) -> BasicStrategy:
        """Build an engine over this chart's tables."""
        return BasicStrategy(rules or self.rule_set(), self.to_tables())
