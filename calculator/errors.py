"""Exceptions raised by the strategy calculator."""


class StrategyError(ValueError):
    """Base class for calculator errors."""


class InvalidHand(StrategyError):
    """The player hand cannot be evaluated (too few cards, or busted)."""


class InvalidDealerCard(StrategyError):
    """The dealer up-card is not a value in 2-11."""


class StrategyFileError(StrategyError):
    """A strategy chart file could not be read or is malformed."""
