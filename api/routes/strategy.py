"""Strategy calculator API endpoints."""

import logging
from functools import lru_cache
from random import Random

from fastapi import APIRouter, HTTPException, Query

from api.schemas import (
    CardResponse,
    CheckRequest,
    CheckResponse,
    PresetResponse,
    RecommendRequest,
    RecommendResponse,
    RulesRequest,
    StrategyDrillRequest,
    StrategyDrillResponse,
)
from calculator.cards import Card, Deck
from calculator.errors import StrategyError
from calculator.hand import Hand
from calculator.strategy import (
    PRESETS,
    BasicStrategy,
    Recommendation,
    RuleSet,
    StrategyChart,
    StrategyLibrary,
    preset,
)
from calculator.strategy.actions import ACTION_LEGEND
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_library() -> StrategyLibrary:
    """Chart library, loaded once per process."""
    return StrategyLibrary(config.strategy.charts_dir)


def _rules(request_rules: RulesRequest | None) -> RuleSet:
    if request_rules is None:
        return config.strategy.rule_set()
    try:
        return request_rules.to_rule_set()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _card(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _parse_hand(cards: list[str], is_split_hand: bool) -> Hand:
    try:
        return Hand.of(*cards, is_split_hand=is_split_hand)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _parse_upcard(upcard: str | int) -> Card | int:
    if isinstance(upcard, int):
        return upcard
    try:
        return Card.from_string(upcard)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _explain(request: RecommendRequest) -> tuple[Hand, Recommendation, RuleSet]:
    rules = _rules(request.rules)
    hand = _parse_hand(request.player_cards, request.is_split_hand)
    upcard = _parse_upcard(request.dealer_upcard)
    strategy = get_library().strategy_for(rules)
    try:
        return hand, strategy.explain(hand, upcard), rules
    except StrategyError as exc:
        logger.info("Rejected strategy request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _legend(recommendation: Recommendation) -> str | None:
    if recommendation.code is None:
        return None
    return ACTION_LEGEND.get(recommendation.code)


@router.post("/recommend")
async def recommend_action(request: RecommendRequest) -> RecommendResponse:
    """Recommend the basic strategy action for a hand."""
    hand, recommendation, rules = _explain(request)
    return RecommendResponse(
        action=str(recommendation.action),
        table=recommendation.table,
        code=recommendation.code,
        explanation=_legend(recommendation),
        player_value=recommendation.total,
        is_soft=recommendation.is_soft,
        is_pair=hand.is_pair,
        dealer_upcard=recommendation.dealer_upcard,
        rules_key=rules.key(),
    )


@router.post("/check")
async def check_action(request: CheckRequest) -> CheckResponse:
    """Grade a user's chosen action against basic strategy."""
    _, recommendation, _ = _explain(request)
    correct_action = str(recommendation.action)
    return CheckResponse(
        correct=request.user_action == correct_action,
        user_action=request.user_action,
        correct_action=correct_action,
        explanation=_legend(recommendation),
    )


@router.get("/presets")
async def list_presets() -> list[PresetResponse]:
    """List the named rule presets."""
    return [
        PresetResponse(name=name, rules_key=factory().key())
        for name, factory in PRESETS.items()
    ]


@router.get("/chart")
async def strategy_chart(
    preset_name: str | None = Query(default=None, alias="preset"),
) -> StrategyChart:
    """Full strategy chart for a preset, or for the configured default rules."""
    if preset_name is None:
        rules = config.strategy.rule_set()
        name = "Default"
    else:
        try:
            rules = preset(preset_name)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        name = preset_name

    match = get_library().find_matching(rules)
    if match is not None:
        return match[1]
    return StrategyChart.from_strategy(BasicStrategy(rules), name=name, description=rules.key())


@router.post("/drill")
async def strategy_drill(request: StrategyDrillRequest) -> StrategyDrillResponse:
    """Deal a random two-card hand and up-card with its correct action."""
    rules = _rules(request.rules)
    deck = Deck(rng=Random(request.seed))
    deck.shuffle()

    player_cards = [deck.draw(), deck.draw()]
    dealer_upcard = deck.draw()
    hand = Hand(player_cards)

    recommendation = get_library().strategy_for(rules).explain(hand, dealer_upcard)

    return StrategyDrillResponse(
        player_cards=[_card(c) for c in player_cards],
        player_value=hand.value,
        is_soft=hand.is_soft,
        is_pair=hand.is_pair,
        dealer_upcard=_card(dealer_upcard),
        correct_action=str(recommendation.action),
        code=recommendation.code,
    )
