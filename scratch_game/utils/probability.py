import logging
import random
from typing import Dict, Mapping

from scratch_game.exceptions import ConfigurationException

logger = logging.getLogger(__name__)


class ProbabilitySelector:
    """
    Weighted random symbol draw over a single weight table.

    Entries are walked in insertion order, which for tables loaded from a
    game configuration is the order they are declared in the JSON document.
    The order decides which symbol wins at a cumulative boundary; it does not
    change the distribution.
    """

    def __init__(self, weights: Mapping[str, int], name: str = "weights"):
        self.name = name
        self.weights: Dict[str, int] = dict(weights)
        _validate_weights(self.weights, name)
        self.total_weight = sum(self.weights.values())

    def select(self, rng: random.Random) -> str:
        """
        Draws one symbol.

        Args:
            rng (random.Random): The random source owned by the current play.

        Returns:
            str: The first symbol whose cumulative weight exceeds the draw.
        """
        pick = rng.random() * self.total_weight
        accumulated = 0
        for symbol, weight in self.weights.items():
            accumulated += weight
            if pick < accumulated:
                return symbol
        # Only reachable through floating point rounding at the upper bound
        return next(iter(self.weights))

    def __repr__(self):
        return f"<ProbabilitySelector {self.name} total={self.total_weight}>"


def _validate_weights(weights, name):
    if not weights:
        raise ConfigurationException(
            f"Weight table '{name}' is empty.",
            details={"table": name}
        )
    for symbol, weight in weights.items():
        if not isinstance(weight, int) or isinstance(weight, bool) or weight < 0:
            raise ConfigurationException(
                f"Weight table '{name}' has an invalid weight {weight!r} for symbol '{symbol}'. "
                "Weights must be non-negative integers.",
                details={"table": name, "symbol": symbol, "weight": weight}
            )
    total = sum(weights.values())
    if total <= 0:
        raise ConfigurationException(
            f"Weight table '{name}' must have a positive total weight (got {total}).",
            details={"table": name, "total_weight": total}
        )
