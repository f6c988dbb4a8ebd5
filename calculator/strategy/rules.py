"""Blackjack rule variations that affect strategy decisions."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal


class SurrenderRule(Enum):
    """When late surrender is offered."""

    NOT_ALLOWED = "Not Allowed"
    ANY_UPCARD = "Any Dealer Upcard"
    DEALER_2_THROUGH_10 = "Dealer 2 through 10"

    @classmethod
    def from_string(cls, value: str) -> "SurrenderRule":
        """Parse a surrender rule from its display name, enum name or short code."""
        for rule in cls:
            if value in (rule.value, rule.name, rule.name.lower(), rule.code):
                return rule
        raise ValueError(f"Unknown surrender rule: {value}")

    @property
    def code(self) -> str:
        return {
            SurrenderRule.NOT_ALLOWED: "none",
            SurrenderRule.ANY_UPCARD: "any",
            SurrenderRule.DEALER_2_THROUGH_10: "2-10",
        }[self]

    def allows(self, dealer_upcard: int) -> bool:
        """Check if surrender is offered against the given up-card."""
        if self == SurrenderRule.NOT_ALLOWED:
            return False
        if self == SurrenderRule.DEALER_2_THROUGH_10:
            return dealer_upcard != 11
        return True


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Frozen so it can key the strategy table cache.
    """

    # Deck configuration
    num_decks: int = 6

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17
    dealer_peeks: bool = True  # US hole card; False is ENHC

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Double down rules
    double_after_split: bool = True  # DAS
    double_on: Literal["any", "9-11", "10-11"] = "any"

    # Split rules
    resplit_aces: bool = False  # RSA

    # Surrender rules
    surrender: SurrenderRule = SurrenderRule.NOT_ALLOWED

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.double_on not in ("any", "9-11", "10-11"):
            raise ValueError(f"Unknown double_on rule: {self.double_on}")
        if not isinstance(self.surrender, SurrenderRule):
            raise ValueError(f"surrender must be a SurrenderRule, got {self.surrender!r}")

    @property
    def surrender_allowed(self) -> bool:
        """Check if surrender is offered at all."""
        return self.surrender != SurrenderRule.NOT_ALLOWED

    def can_double_total(self, total: int, is_soft: bool) -> bool:
        """Check if the double_on restriction permits doubling this total."""
        if self.double_on == "any":
            return True
        if is_soft:
            return False
        low = 9 if self.double_on == "9-11" else 10
        return low <= total <= 11

    def key(self) -> str:
        """Stable identifier used to match strategy charts to a table."""
        return (
            f"decks{self.num_decks}"
            f"_s17{'n' if self.dealer_hits_soft_17 else 'y'}"
            f"_das{'y' if self.double_after_split else 'n'}"
            f"_peak{'y' if self.dealer_peeks else 'n'}"
            f"_surr{self.surrender.code}"
        )

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Standard Vegas Strip rules."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=False,
            double_after_split=True,
            surrender=SurrenderRule.ANY_UPCARD,
        )

    @classmethod
    def downtown_vegas(cls) -> "RuleSet":
        """Downtown Las Vegas rules (typically H17)."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=True,
            double_after_split=True,
            surrender=SurrenderRule.ANY_UPCARD,
        )

    @classmethod
    def single_deck(cls) -> "RuleSet":
        """Single deck rules."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            double_after_split=False,
            surrender=SurrenderRule.NOT_ALLOWED,
        )

    @classmethod
    def atlantic_city(cls) -> "RuleSet":
        """Atlantic City rules."""
        return cls(
            num_decks=8,
            dealer_hits_soft_17=False,
            double_after_split=True,
            surrender=SurrenderRule.ANY_UPCARD,
        )


PRESETS = {
    "vegas_strip": RuleSet.vegas_strip,
    "downtown_vegas": RuleSet.downtown_vegas,
    "atlantic_city": RuleSet.atlantic_city,
    "single_deck": RuleSet.single_deck,
}


def preset(name: str) -> RuleSet:
    """Look up a named rule preset."""
    try:
        return PRESETS[name]()
    except KeyError:
        raise ValueError(f"Unknown rule preset: {name}") from None
