"""Blackjack basic strategy calculator - UI-agnostic core."""

from calculator.cards import Card, Deck, Rank, Suit
from calculator.errors import InvalidDealerCard, InvalidHand, StrategyError, StrategyFileError
from calculator.hand import Hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "StrategyError",
    "InvalidHand",
    "InvalidDealerCard",
    "StrategyFileError",
]
