import logging
import random

import numpy as np

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ValidationException
from scratch_game.models import GameConfig
from scratch_game.utils.game_engine import GameEngine, validate_bet_amount

logger = logging.getLogger(__name__)


class GameTester:
    """
    Plays many rounds of one configuration and collects payout statistics.

    All rounds draw from a single ``random.Random`` seeded once, so a run with
    a fixed seed is reproducible.
    """

    def __init__(self, config: GameConfig, num_rounds, bet_amount, seed=None):
        if isinstance(num_rounds, bool) or not isinstance(num_rounds, int) or num_rounds <= 0:
            raise ValidationException(
                f"Invalid number of rounds {num_rounds!r}. Must be a positive integer.",
                details={"rounds": str(num_rounds)},
                error_code=ErrorCodes.VALIDATION_ERROR
            )
        self.config = config
        self.engine = GameEngine(config)
        self.num_rounds = num_rounds
        self.bet_amount = validate_bet_amount(bet_amount)
        self.seed = seed
        self.rng = random.Random(seed)

        # Statistics to be collected
        self.total_bet = 0.0
        self.total_win = 0.0
        self.hit_count = 0
        self.bonus_hit_count = 0
        self.max_win = 0.0
        self.rewards = []
        self.wins_by_multiplier = {}
        self.combination_hits = {}

        self.rtp = 0.0
        self.hit_frequency = 0.0
        self.bonus_frequency = 0.0
        self.average_win = 0.0
        self.volatility_index = 0.0

    def run_simulation(self):
        logger.info(
            "Starting simulation: %d rounds at %s per round (seed=%s)",
            self.num_rounds, self.bet_amount, self.seed
        )
        progress_interval = self.num_rounds // 10 or 1
        for i in range(self.num_rounds):
            result = self.engine.play(self.bet_amount, rng=self.rng)
            self._collect_round_statistics(result)
            if (i + 1) % progress_interval == 0:
                logger.debug("Completed %d/%d rounds", i + 1, self.num_rounds)

        self.calculate_derived_statistics()
        logger.info("Simulation finished: RTP %.2f%% over %d rounds", self.rtp, self.num_rounds)
        return self

    def _collect_round_statistics(self, result):
        reward = result.reward
        self.total_bet += self.bet_amount
        self.total_win += reward
        self.rewards.append(reward)

        if reward > 0:
            self.hit_count += 1
            if any(self.config.bonus_symbol(name).has_effect for name in result.applied_bonus_symbols):
                self.bonus_hit_count += 1
        self.max_win = max(self.max_win, reward)

        multiplier_category = round(reward / self.bet_amount)
        self.wins_by_multiplier[multiplier_category] = self.wins_by_multiplier.get(multiplier_category, 0) + 1

        for names in result.applied_winning_combinations.values():
            for name in names:
                self.combination_hits[name] = self.combination_hits.get(name, 0) + 1

    def calculate_derived_statistics(self):
        rounds_played = len(self.rewards)
        if rounds_played == 0:
            return

        self.rtp = (self.total_win / self.total_bet) * 100 if self.total_bet > 0 else 0.0
        self.hit_frequency = (self.hit_count / rounds_played) * 100
        self.bonus_frequency = (self.bonus_hit_count / rounds_played) * 100
        self.average_win = (self.total_win / self.hit_count) if self.hit_count > 0 else 0.0
        self.volatility_index = float(np.std(self.rewards)) / self.bet_amount

    def to_dict(self):
        return {
            "rounds": len(self.rewards),
            "bet_amount": self.bet_amount,
            "total_bet": self.total_bet,
            "total_win": self.total_win,
            "rtp": self.rtp,
            "hit_count": self.hit_count,
            "hit_frequency": self.hit_frequency,
            "bonus_hit_count": self.bonus_hit_count,
            "bonus_frequency": self.bonus_frequency,
            "average_win": self.average_win,
            "max_win": self.max_win,
            "volatility_index": self.volatility_index,
            "wins_by_multiplier": {str(k): v for k, v in sorted(self.wins_by_multiplier.items())},
            "combination_hits": dict(sorted(self.combination_hits.items())),
        }

    def summary_lines(self):
        rounds_played = len(self.rewards)
        lines = [
            "--- Simulation Summary ---",
            f"Grid: {self.config.rows}x{self.config.columns}",
            f"Rounds Simulated: {rounds_played}",
            f"Bet Amount Per Round: {self.bet_amount:g}",
            f"Total Wagered: {self.total_bet:.2f}",
            f"Total Won: {self.total_win:.2f}",
            "",
            "--- Detailed Metrics ---",
            f"RTP: {self.rtp:.2f}%",
            f"Hit Frequency: {self.hit_frequency:.2f}% ({self.hit_count} wins out of {rounds_played} rounds)",
            f"Bonus Frequency: {self.bonus_frequency:.2f}% ({self.bonus_hit_count} wins boosted by bonus symbols)",
            f"Average Win: {self.average_win:.2f}",
            f"Max Win: {self.max_win:.2f}",
            f"Volatility Index (Win StdDev / Bet): {self.volatility_index:.2f}",
            "",
            "Win Distribution (by Bet Multiplier):",
        ]
        for mult, count in sorted(self.wins_by_multiplier.items()):
            percentage = (count / rounds_played) * 100 if rounds_played else 0
            lines.append(f"  {mult}x Bet: {count} times ({percentage:.2f}%)")
        if self.combination_hits:
            lines.append("")
            lines.append("Winning Combination Hits:")
            for name, count in sorted(self.combination_hits.items()):
                lines.append(f"  {name}: {count}")
        return lines
