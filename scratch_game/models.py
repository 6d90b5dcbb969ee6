"""
Domain models for the scratch game engine.

Configuration documents are resolved into these frozen objects once, at load
time, so the engine never branches on raw ``type``/``impact``/``when`` strings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from scratch_game.exceptions import ConfigurationException

Coordinate = Tuple[int, int]
Grid = List[List[str]]
MatchSet = Dict[str, List[str]]


class BonusImpact(Enum):
    MULTIPLY_REWARD = "multiply_reward"
    EXTRA_BONUS = "extra_bonus"
    NO_EFFECT = "no_effect"

    @classmethod
    def from_config(cls, value: Optional[str]) -> "BonusImpact":
        """Unknown or missing impacts resolve to NO_EFFECT (e.g. ``"miss"``)."""
        if value == cls.MULTIPLY_REWARD.value:
            return cls.MULTIPLY_REWARD
        if value == cls.EXTRA_BONUS.value:
            return cls.EXTRA_BONUS
        return cls.NO_EFFECT


@dataclass(frozen=True)
class StandardSymbol:
    name: str
    reward_multiplier: float

    is_standard = True
    is_bonus = False


@dataclass(frozen=True)
class BonusSymbol:
    name: str
    impact: BonusImpact
    reward_multiplier: float = 1.0
    extra: float = 0.0

    is_standard = False
    is_bonus = True

    @property
    def has_effect(self) -> bool:
        return self.impact is not BonusImpact.NO_EFFECT

    def apply(self, reward: float) -> float:
        if self.impact is BonusImpact.MULTIPLY_REWARD:
            return reward * self.reward_multiplier
        if self.impact is BonusImpact.EXTRA_BONUS:
            return reward + self.extra
        return reward


Symbol = Union[StandardSymbol, BonusSymbol]


@dataclass(frozen=True)
class SameSymbolsCombination:
    name: str
    reward_multiplier: float
    count: int
    group: Optional[str] = None

    when = "same_symbols"


@dataclass(frozen=True)
class LinearSymbolsCombination:
    name: str
    reward_multiplier: float
    covered_areas: Tuple[Tuple[Coordinate, ...], ...]
    group: Optional[str] = None

    when = "linear_symbols"


@dataclass(frozen=True)
class UnsupportedCombination:
    """A pattern whose ``when`` is not understood; it never matches."""
    name: str
    reward_multiplier: float
    when: Optional[str] = None
    group: Optional[str] = None


WinCombination = Union[SameSymbolsCombination, LinearSymbolsCombination, UnsupportedCombination]


@dataclass(frozen=True)
class CellProbability:
    row: int
    column: int
    weights: Dict[str, int]


@dataclass(frozen=True)
class GameConfig:
    rows: int
    columns: int
    symbols: Dict[str, Symbol]
    standard_probabilities: Tuple[CellProbability, ...]
    bonus_probabilities: Optional[Dict[str, int]]
    win_combinations: Dict[str, WinCombination]

    def __post_init__(self):
        for key, value in (("rows", self.rows), ("columns", self.columns)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigurationException(
                    f"Grid {key} must be a positive integer, got {value!r}.",
                    details={"field": key, "value": value}
                )
        if not self.standard_probabilities:
            raise ConfigurationException(
                "probabilities.standard_symbols must define at least one weight table.",
                details={"field": "probabilities.standard_symbols"}
            )
        for index, cell in enumerate(self.standard_probabilities):
            self.check_table_symbols(cell.weights, f"standard_symbols[{index}] ({cell.row}:{cell.column})")
        if self.bonus_probabilities is not None:
            self.check_table_symbols(self.bonus_probabilities, "bonus_symbols")
        for combination in self.win_combinations.values():
            if isinstance(combination, LinearSymbolsCombination):
                self.check_areas(combination)

    def check_table_symbols(self, weights, table: str) -> None:
        for name in weights:
            if name not in self.symbols:
                raise ConfigurationException(
                    f"Weight table '{table}' refers to unknown symbol '{name}'.",
                    details={"table": table, "symbol": name}
                )

    def check_areas(self, combination: LinearSymbolsCombination) -> None:
        for area_index, area in enumerate(combination.covered_areas):
            for row, column in area:
                if not (0 <= row < self.rows and 0 <= column < self.columns):
                    raise ConfigurationException(
                        f"Win combination '{combination.name}' covers {row}:{column}, "
                        f"outside the {self.rows}x{self.columns} grid.",
                        details={
                            "win_combination": combination.name,
                            "area_index": area_index,
                            "coordinate": f"{row}:{column}",
                        }
                    )

    def standard_symbol(self, name: str) -> Optional[StandardSymbol]:
        symbol = self.symbols.get(name)
        return symbol if isinstance(symbol, StandardSymbol) else None

    def bonus_symbol(self, name: str) -> Optional[BonusSymbol]:
        symbol = self.symbols.get(name)
        return symbol if isinstance(symbol, BonusSymbol) else None


@dataclass(frozen=True)
class GameResult:
    matrix: Grid
    reward: float
    applied_winning_combinations: MatchSet = field(default_factory=dict)
    applied_bonus_symbols: Optional[List[str]] = None

    @property
    def applied_bonus_symbol(self) -> Optional[str]:
        """Legacy wire form: every bonus symbol followed by a comma."""
        if self.applied_bonus_symbols is None:
            return None
        return "".join(f"{name}," for name in self.applied_bonus_symbols)
