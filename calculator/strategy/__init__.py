"""Strategy tables, rule sets and the recommendation engine."""

from calculator.strategy.actions import Action, Cell, ConditionalAction, PlainAction, Requirement
from calculator.strategy.basic import BasicStrategy, Recommendation, recommend
from calculator.strategy.charts import StrategyChart
from calculator.strategy.library import StrategyLibrary
from calculator.strategy.rules import PRESETS, RuleSet, SurrenderRule, preset

__all__ = [
    "Action",
    "Cell",
    "PlainAction",
    "ConditionalAction",
    "Requirement",
    "BasicStrategy",
    "Recommendation",
    "recommend",
    "StrategyChart",
    "StrategyLibrary",
    "RuleSet",
    "SurrenderRule",
    "PRESETS",
    "preset",
]
