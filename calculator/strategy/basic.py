"""Basic strategy engine: table selection and rule resolution."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Mapping

from calculator.cards import Card
from calculator.errors import InvalidDealerCard, InvalidHand
from calculator.hand import Hand
from calculator.strategy.actions import Action, Cell, ConditionalAction, Requirement
from calculator.strategy.rules import RuleSet
from calculator.strategy.tables import StrategyTables, TableKey, build_tables

logger = logging.getLogger(__name__)

TableName = Literal["pair", "soft", "hard", "twenty-one", "default"]


@dataclass(frozen=True)
class Recommendation:
    """How a recommendation was reached, for hints and drills."""

    action: Action
    table: TableName
    cell: Cell | None
    total: int
    is_soft: bool
    dealer_upcard: int

    @property
    def code(self) -> str | None:
        return self.cell.code if self.cell is not None else None


def upcard_value(dealer_upcard: Card | int) -> int:
    """Normalize a dealer up-card to its 2-11 value."""
    if isinstance(dealer_upcard, Card):
        return dealer_upcard.value
    if isinstance(dealer_upcard, bool) or not isinstance(dealer_upcard, int):
        raise InvalidDealerCard(f"Dealer upcard must be a Card or int, got {dealer_upcard!r}")
    if not 2 <= dealer_upcard <= 11:
        raise InvalidDealerCard(
            f"Dealer upcard must be between 2 and 11 (Ace = 11), got {dealer_upcard}"
        )
    return dealer_upcard


def validate_hand(hand: Hand) -> None:
    """Reject hands the engine cannot evaluate."""
    if hand.num_cards < 2:
        raise InvalidHand(f"Hand needs at least 2 cards, got {hand.num_cards}")
    if hand.is_busted:
        raise InvalidHand(f"Hand is already busted ({hand.value})")


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Tables are plain dictionaries keyed by (total, dealer upcard). Cells that
    depend on a rule or on the hand (double, DAS, surrender) are stored as
    conditional cells and resolved at lookup time.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        tables: StrategyTables | None = None,
    ) -> None:
        """
        Initialize basic strategy for given rules.

        Args:
            rules: Rule set to resolve against. Uses default if None.
            tables: Pre-built tables, e.g. from a chart file. Built from the
                published charts for ``rules`` if None.
        """
        self.rules = rules or RuleSet()
        if tables is None:
            logger.debug("Building strategy tables for %s", self.rules.key())
            tables = build_tables(self.rules)
        self._tables = tables

    def recommend(self, hand: Hand, dealer_upcard: Card | int) -> Action:
        """
        Get the basic strategy action.

        Args:
            hand: Player hand, at least two cards and not busted
            dealer_upcard: Dealer's upcard, a Card or its value (2-11, Ace=11)

        Returns:
            The recommended action

        Raises:
            InvalidHand: fewer than two cards, or busted
            InvalidDealerCard: upcard value outside 2-11
        """
        return self.explain(hand, dealer_upcard).action

    def explain(self, hand: Hand, dealer_upcard: Card | int) -> Recommendation:
        """Like ``recommend``, but also report which table and cell were used."""
        dealer = upcard_value(dealer_upcard)
        validate_hand(hand)

        total = hand.value
        is_soft = hand.is_soft

        def result(action: Action, table: TableName, cell: Cell | None) -> Recommendation:
            return Recommendation(action, table, cell, total, is_soft, dealer)

        if total == 21:
            return result(Action.STAND, "twenty-one", None)

        # Check for pairs first
        if self._can_split(hand):
            cell = self._tables.pair.get((hand.pair_value, dealer))
            if cell is not None:
                return result(self._resolve(cell, hand, dealer), "pair", cell)

        # Check soft hands
        if is_soft:
            cell = self._tables.soft.get((total, dealer))
            if cell is not None:
                return result(self._resolve(cell, hand, dealer), "soft", cell)

        # Hard hands, and soft totals the soft table does not cover
        cell = self._tables.hard.get((total, dealer))
        if cell is not None:
            return result(self._resolve(cell, hand, dealer), "hard", cell)

        return result(Action.STAND if total >= 17 else Action.HIT, "default", None)

    def _can_split(self, hand: Hand) -> bool:
        if not hand.is_pair:
            return False
        if hand.is_split_hand and hand.pair_value == 11:
            return self.rules.resplit_aces
        return True

    def _resolve(self, cell: Cell, hand: Hand, dealer: int) -> Action:
        """Resolve conditional cells based on what the rules and hand allow."""
        if not isinstance(cell, ConditionalAction):
            return cell.action
        if self._allows(cell.requires, hand, dealer):
            return cell.primary
        return cell.fallback

    def _allows(self, requirement: Requirement, hand: Hand, dealer: int) -> bool:
        rules = self.rules
        if requirement == Requirement.DOUBLE:
            if hand.num_cards != 2:
                return False
            if hand.is_split_hand and not rules.double_after_split:
                return False
            return rules.can_double_total(hand.value, hand.is_soft)
        if requirement == Requirement.DOUBLE_AFTER_SPLIT:
            return rules.double_after_split
        if requirement == Requirement.SURRENDER:
            if hand.num_cards != 2 or hand.is_split_hand:
                return False
            return rules.surrender.allows(dealer)
        raise ValueError(f"Unknown requirement: {requirement}")

    @property
    def tables(self) -> StrategyTables:
        return self._tables

    @property
    def hard_table(self) -> Mapping[TableKey, Cell]:
        """Return the hard totals strategy table."""
        return self._tables.hard

    @property
    def soft_table(self) -> Mapping[TableKey, Cell]:
        """Return the soft totals strategy table."""
        return self._tables.soft

    @property
    def pair_table(self) -> Mapping[TableKey, Cell]:
        """Return the pair splitting strategy table."""
        return self._tables.pair


@lru_cache(maxsize=32)
def strategy_for_rules(rules: RuleSet) -> BasicStrategy:
    """Shared strategy per rule set; tables are read-only once built."""
    return BasicStrategy(rules)


def recommend(
    hand: Hand,
    dealer_upcard: Card | int,
    rules: RuleSet | None = None,
) -> Action:
    """Return the basic strategy action for a hand against a dealer upcard."""
    return strategy_for_rules(rules or RuleSet()).recommend(hand, dealer_upcard)
