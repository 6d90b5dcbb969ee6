import logging

from scratch_game.models import GameConfig, Grid, MatchSet

logger = logging.getLogger(__name__)


class RewardCalculator:
    """
    Turns a bet and a match set into the final reward.

    Each matched standard symbol pays ``bet * symbol multiplier``, multiplied
    by the multiplier of every combination it matched. Bonus symbols anywhere
    on the grid then adjust a positive total, one application per occurrence.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def calculate(self, grid: Grid, bet_amount: float, match_set: MatchSet) -> float:
        if not match_set:
            return 0.0

        total = sum(
            self.symbol_reward(symbol, bet_amount, combination_names)
            for symbol, combination_names in match_set.items()
        )
        return self.apply_bonus_symbols(grid, total)

    def symbol_reward(self, symbol, bet_amount, combination_names):
        standard_symbol = self.config.standard_symbol(symbol)
        if standard_symbol is None:
            return 0.0

        reward = bet_amount * standard_symbol.reward_multiplier
        for name in combination_names:
            combination = self.config.win_combinations.get(name)
            if combination is None:
                continue
            reward *= combination.reward_multiplier
        return reward

    def apply_bonus_symbols(self, grid: Grid, reward: float) -> float:
        if reward <= 0:
            return reward

        for name in self.bonus_occurrences(grid):
            reward = self.config.bonus_symbol(name).apply(reward)
        return reward

    def bonus_occurrences(self, grid: Grid):
        """Bonus symbol names found on the grid, in row-major scan order."""
        return [
            symbol for row in grid for symbol in row
            if self.config.bonus_symbol(symbol) is not None
        ]
