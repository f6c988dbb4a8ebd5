"""A directory of strategy charts, matched to table rules."""

import logging
from pathlib import Path

from calculator.errors import StrategyFileError
from calculator.strategy.basic import BasicStrategy, strategy_for_rules
from calculator.strategy.charts import StrategyChart
from calculator.strategy.rules import RuleSet

logger = logging.getLogger(__name__)

BUNDLED_CHARTS_DIR = Path(__file__).parent / "charts"


def _matches(chart_rules: RuleSet, rules: RuleSet) -> bool:
    return (
        chart_rules.num_decks == rules.num_decks
        and chart_rules.dealer_hits_soft_17 == rules.dealer_hits_soft_17
        and chart_rules.double_after_split == rules.double_after_split
        and chart_rules.dealer_peeks == rules.dealer_peeks
        and chart_rules.surrender == rules.surrender
    )


class StrategyLibrary:
    """
    Charts loaded from ``*.json`` files, keyed by file stem.

    Files that fail to load are logged and skipped so one bad chart does not
    hide the others.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory) if directory is not None else BUNDLED_CHARTS_DIR
        self._charts: dict[str, StrategyChart] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read every chart in the directory."""
        self._charts = {}
        if not self.directory.is_dir():
            logger.warning("Strategy chart directory %s does not exist", self.directory)
            return

        for path in sorted(self.directory.glob("*.json")):
            try:
                chart = StrategyChart.from_file(path)
            except StrategyFileError as exc:
                logger.warning("Skipping strategy chart %s: %s", path.name, exc)
                continue
            self._charts[path.stem] = chart
            logger.info("Loaded strategy chart %s (%s)", path.stem, chart.rule_set().key())

    def names(self) -> list[str]:
        return sorted(self._charts)

    def get(self, name: str) -> StrategyChart:
        try:
            return self._charts[name]
        except KeyError:
            raise KeyError(f"No strategy chart named {name!r}") from None

    def find_matching(self, rules: RuleSet) -> tuple[str, StrategyChart] | None:
        """Find the chart whose decks, soft 17, DAS, peek and surrender rules match exactly."""
        for name in self.names():
            chart = self._charts[name]
            if _matches(chart.rule_set(), rules):
                return name, chart
        return None

    def strategy_for(self, rules: RuleSet) -> BasicStrategy:
        """Strategy from a matching chart, or the built-in tables when none matches."""
        match = self.find_matching(rules)
        if match is None:
            logger.debug("No chart for %s, using built-in tables", rules.key())
            return strategy_for_rules(rules)
        name, chart = match
        logger.debug("Using strategy chart %s for %s", name, rules.key())
        return chart.to_strategy(rules)

    def __len__(self) -> int:
        return len(self._charts)

    def __contains__(self, name: object) -> bool:
        return name in self._charts
