"""Hand evaluation for strategy lookups."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from calculator.cards import Card


@dataclass
class Hand:
    """A player hand. Totals are recomputed from the cards on every read."""

    cards: list[Card] = field(default_factory=list)
    is_split_hand: bool = False

    @classmethod
    def of(cls, *cards: Card | str, is_split_hand: bool = False) -> "Hand":
        """Build a hand from cards or card strings, e.g. ``Hand.of("A", "7")``."""
        hand = cls(is_split_hand=is_split_hand)
        for card in cards:
            hand.add_card(Card.from_string(card) if isinstance(card, str) else card)
        return hand

    @classmethod
    def from_values(cls, values: Iterable[int], is_split_hand: bool = False) -> "Hand":
        """Build a hand from strategy values (2-11)."""
        return cls([Card.from_value(v) for v in values], is_split_hand=is_split_hand)

    def add_card(self, card: Card) -> None:
        self.cards.append(card)

    @property
    def hard_total(self) -> int:
        """Total with every Ace counted as 1."""
        return sum(1 if card.is_ace else card.value for card in self.cards)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Returns the highest value that doesn't bust, or the lowest bust value.
        """
        total = self.hard_total
        if self.is_soft:
            return total + 10
        return total

    @property
    def is_soft(self) -> bool:
        """Check if the hand has an Ace that can count as 11 without busting."""
        if not any(card.is_ace for card in self.cards):
            return False
        return self.hard_total + 10 <= 21

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def is_busted(self) -> bool:
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        """Two cards of equal strategy value (so K-10 counts as a pair)."""
        return len(self.cards) == 2 and self.cards[0].value == self.cards[1].value

    @property
    def pair_value(self) -> int | None:
        """The value of the paired card (2-11), or None if not a pair."""
        return self.cards[0].value if self.is_pair else None

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
