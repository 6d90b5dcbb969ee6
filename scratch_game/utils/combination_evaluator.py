import logging
from collections import Counter

from scratch_game.models import (
    GameConfig, Grid, LinearSymbolsCombination, MatchSet, SameSymbolsCombination
)

logger = logging.getLogger(__name__)


class CombinationEvaluator:
    """Finds the winning combinations each standard symbol satisfies on a grid."""

    def __init__(self, config: GameConfig):
        self.config = config

    def evaluate(self, grid: Grid) -> MatchSet:
        """
        Evaluates every configured win combination against ``grid``.

        Args:
            grid (list[list[str]]): A fully populated grid.

        Returns:
            dict: Standard symbol -> names of the combinations it matched, in
                  catalog order. A linear pattern is listed once per
                  matching area.
        """
        match_set = {}
        for name, combination in self.config.win_combinations.items():
            if isinstance(combination, SameSymbolsCombination):
                matched_symbols = self._check_same_symbols(grid, combination)
            elif isinstance(combination, LinearSymbolsCombination):
                matched_symbols = self._check_linear_symbols(grid, combination)
            else:
                continue

            for symbol in matched_symbols:
                match_set.setdefault(symbol, []).append(name)

        logger.debug("Winning combinations: %s", match_set)
        return match_set

    def _check_same_symbols(self, grid, combination):
        symbol_counts = Counter(symbol for row in grid for symbol in row)
        return [
            symbol for symbol, count in symbol_counts.items()
            if count >= combination.count and self.config.standard_symbol(symbol) is not None
        ]

    def _check_linear_symbols(self, grid, combination):
        matched = []
        for area in combination.covered_areas:
            area_symbols = {grid[row][column] for row, column in area}
            if len(area_symbols) != 1:
                continue
            symbol = area_symbols.pop()
            if self.config.standard_symbol(symbol) is not None:
                matched.append(symbol)
        return matched
