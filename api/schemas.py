"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from calculator.strategy import RuleSet, SurrenderRule


class RulesRequest(BaseModel):
    """Table rules sent with a request."""

    num_decks: int = Field(default=6, ge=1, le=8)
    dealer_hits_soft_17: bool = True
    dealer_peeks: bool = True
    double_after_split: bool = True
    double_on: Literal["any", "9-11", "10-11"] = "any"
    resplit_aces: bool = False
    surrender: Literal["none", "any", "2-10"] = "none"

    def to_rule_set(self) -> RuleSet:
        return RuleSet(
            num_decks=self.num_decks,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            dealer_peeks=self.dealer_peeks,
            double_after_split=self.double_after_split,
            double_on=self.double_on,
            resplit_aces=self.resplit_aces,
            surrender=SurrenderRule.from_string(self.surrender),
        )


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


class RecommendRequest(BaseModel):
    """Hand and up-card to evaluate."""

    player_cards: list[str] = Field(..., min_length=1, description="Cards like 'AS', '10h', 'K'")
    dealer_upcard: str | int = Field(..., description="Card string, or value 2-11 (Ace = 11)")
    is_split_hand: bool = False
    rules: RulesRequest | None = None


class RecommendResponse(BaseModel):
    """Recommended action and how it was reached."""

    action: str
    table: str
    code: str | None
    explanation: str | None
    player_value: int
    is_soft: bool
    is_pair: bool
    dealer_upcard: int
    rules_key: str


class CheckRequest(RecommendRequest):
    """A user's answer to a strategy question."""

    user_action: Literal["hit", "stand", "double", "split", "surrender"]


class CheckResponse(BaseModel):
    """Graded answer."""

    correct: bool
    user_action: str
    correct_action: str
    explanation: str | None


class PresetResponse(BaseModel):
    """A named rule preset."""

    name: str
    rules_key: str


class StrategyDrillRequest(BaseModel):
    """Request for strategy drill."""

    rules: RulesRequest | None = None
    seed: int | None = None


class StrategyDrillResponse(BaseModel):
    """Strategy drill result."""

    player_cards: list[CardResponse]
    player_value: int
    is_soft: bool
    is_pair: bool
    dealer_upcard: CardResponse
    correct_action: str
    code: str | None
