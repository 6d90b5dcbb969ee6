import logging
import random

from scratch_game.models import GameConfig, Grid
from scratch_game.utils.probability import ProbabilitySelector

logger = logging.getLogger(__name__)

# Upper bound (exclusive) on bonus symbols overlaid on one grid
MAX_BONUS_OVERLAYS = 3


class MatrixGenerator:
    """
    Builds the symbol grid for one play.

    Every cell is filled from its own weight table (or the fallback table,
    the first one configured), then 0-2 random cells are overwritten with
    bonus symbols. All selectors are created here so that a bad weight table
    is reported before the first play.
    """

    def __init__(self, config: GameConfig):
        self.rows = config.rows
        self.columns = config.columns

        cell_selectors = {}
        for index, cell in enumerate(config.standard_probabilities):
            position = (cell.row, cell.column)
            selector = ProbabilitySelector(
                cell.weights, name=f"standard_symbols[{index}] ({cell.row}:{cell.column})"
            )
            if not (0 <= cell.row < self.rows and 0 <= cell.column < self.columns):
                logger.warning(
                    "Weight table standard_symbols[%d] targets cell %d:%d outside the %dx%d grid; "
                    "it is only used if it is the fallback table.",
                    index, cell.row, cell.column, self.rows, self.columns
                )
            if position in cell_selectors:
                logger.warning(
                    "Weight table standard_symbols[%d] duplicates cell %d:%d; the first entry is used.",
                    index, cell.row, cell.column
                )
                continue
            cell_selectors[position] = selector
            if index == 0:
                self.fallback_selector = selector

        self.cell_selectors = cell_selectors
        if config.bonus_probabilities is not None:
            self.bonus_selector = ProbabilitySelector(config.bonus_probabilities, name="bonus_symbols")
        else:
            self.bonus_selector = None

    def selector_for(self, row: int, column: int) -> ProbabilitySelector:
        return self.cell_selectors.get((row, column), self.fallback_selector)

    def generate(self, rng: random.Random) -> Grid:
        """
        Generates a fully populated grid.

        Args:
            rng (random.Random): Random source owned by the current play.

        Returns:
            list[list[str]]: ``rows`` lists of ``columns`` symbol names.
        """
        grid = [
            [self.selector_for(r_idx, c_idx).select(rng) for c_idx in range(self.columns)]
            for r_idx in range(self.rows)
        ]

        if self.bonus_selector is None:
            return grid

        bonus_count = rng.randrange(MAX_BONUS_OVERLAYS)
        for _ in range(bonus_count):
            r_idx = rng.randrange(self.rows)
            c_idx = rng.randrange(self.columns)
            grid[r_idx][c_idx] = self.bonus_selector.select(rng)
            logger.debug("Bonus symbol %s placed at %d:%d", grid[r_idx][c_idx], r_idx, c_idx)

        return grid
