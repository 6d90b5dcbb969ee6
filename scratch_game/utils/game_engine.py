import logging
import math
import random
import secrets
from typing import Optional

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ValidationException
from scratch_game.models import GameConfig, GameResult, Grid
from scratch_game.utils.combination_evaluator import CombinationEvaluator
from scratch_game.utils.matrix_generator import MatrixGenerator
from scratch_game.utils.reward_calculator import RewardCalculator

logger = logging.getLogger(__name__)

# Bonus symbol left out of the applied bonus annotation
MISS_SYMBOL = "MISS"


class GameEngine:
    """
    Plays single rounds of a scratch game.

    The configuration is shared read-only between plays; every play draws
    from the random source it is given, so one engine can serve any number
    of independent rounds.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.matrix_generator = MatrixGenerator(config)
        self.combination_evaluator = CombinationEvaluator(config)
        self.reward_calculator = RewardCalculator(config)

    def play(self, bet_amount, rng: Optional[random.Random] = None) -> GameResult:
        """
        Generates a grid and evaluates it.

        Args:
            bet_amount (float): Positive stake for the round.
            rng (random.Random, optional): Random source for this play. A fresh
                ``secrets.SystemRandom`` is used when omitted.

        Returns:
            GameResult: The grid, reward, matched combinations and bonus symbols.

        Raises:
            ValidationException: If ``bet_amount`` is not a positive, finite number.
        """
        bet_amount = validate_bet_amount(bet_amount)
        if rng is None:
            rng = secrets.SystemRandom()

        matrix = self.matrix_generator.generate(rng)
        return self.evaluate(matrix, bet_amount)

    def evaluate(self, matrix: Grid, bet_amount) -> GameResult:
        """Deterministic part of a play: evaluation of an already generated grid."""
        bet_amount = validate_bet_amount(bet_amount)

        winning_combinations = self.combination_evaluator.evaluate(matrix)
        reward = self.reward_calculator.calculate(matrix, bet_amount, winning_combinations)
        bonus_symbols = self.find_applied_bonus_symbols(matrix, winning_combinations)

        logger.debug("Played grid %s with bet %s: reward=%s", matrix, bet_amount, reward)
        return GameResult(
            matrix=matrix,
            reward=reward,
            applied_winning_combinations=winning_combinations,
            applied_bonus_symbols=bonus_symbols,
        )

    def find_applied_bonus_symbols(self, matrix, winning_combinations):
        if not winning_combinations:
            return None
        return [
            name for name in self.reward_calculator.bonus_occurrences(matrix)
            if name != MISS_SYMBOL
        ]


def validate_bet_amount(bet_amount) -> float:
    try:
        if isinstance(bet_amount, bool):
            raise TypeError("booleans are not amounts")
        amount = float(bet_amount)
    except (TypeError, ValueError):
        raise ValidationException(
            f"Invalid bet amount {bet_amount!r}. Must be a positive number.",
            details={"bet_amount": str(bet_amount)},
            error_code=ErrorCodes.INVALID_BET
        )
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationException(
            f"Invalid bet amount {bet_amount!r}. Must be a positive number.",
            details={"bet_amount": str(bet_amount)},
            error_code=ErrorCodes.INVALID_BET
        )
    return amount
