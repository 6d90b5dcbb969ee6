from marshmallow import Schema, fields, ValidationError, EXCLUDE, post_load, validates_schema
from marshmallow.validate import OneOf, Range, Length

from .models import (
    BonusImpact, BonusSymbol, CellProbability, GameConfig, LinearSymbolsCombination,
    SameSymbolsCombination, StandardSymbol, UnsupportedCombination
)

SYMBOL_TYPES = ["standard", "bonus"]

# --- Custom Fields ---
class CoordinateField(fields.Field):
    """A ``"row:col"`` string, loaded as a ``(row, col)`` tuple of ints."""

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise ValidationError(f"Coordinate must be a 'row:col' string, got {value!r}.")
        parts = value.split(":")
        if len(parts) != 2:
            raise ValidationError(f"Coordinate '{value}' must have the form 'row:col'.")
        try:
            row, column = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValidationError(f"Coordinate '{value}' must contain two integers.")
        return row, column

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        row, column = value
        return f"{row}:{column}"

class WeightTableField(fields.Dict):
    """Symbol -> non-negative integer weight, with a positive total."""

    def __init__(self, **kwargs):
        super().__init__(
            keys=fields.String(),
            values=fields.Integer(strict=True, validate=Range(min=0, error="Weights must be non-negative integers.")),
            **kwargs
        )

    def _deserialize(self, value, attr, data, **kwargs):
        weights = super()._deserialize(value, attr, data, **kwargs)
        if not weights:
            raise ValidationError("Weight table must not be empty.")
        if sum(weights.values()) <= 0:
            raise ValidationError("Weight table must have a positive total weight.")
        return weights

# --- Game Configuration Schemas ---
class SymbolSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    type = fields.Str(required=True, validate=OneOf(SYMBOL_TYPES))
    reward_multiplier = fields.Float(load_default=None, validate=Range(min=0, min_inclusive=False))
    impact = fields.Str(load_default=None)
    extra = fields.Float(load_default=None)

    @validates_schema
    def validate_symbol_fields(self, data, **kwargs):
        symbol_type = data.get("type")
        impact = data.get("impact")
        if symbol_type == "standard" and data.get("reward_multiplier") is None:
            raise ValidationError("Standard symbols require a reward_multiplier.", "reward_multiplier")
        if symbol_type == "bonus":
            if impact == BonusImpact.MULTIPLY_REWARD.value and data.get("reward_multiplier") is None:
                raise ValidationError("'multiply_reward' bonus symbols require a reward_multiplier.", "reward_multiplier")
            if impact == BonusImpact.EXTRA_BONUS.value and data.get("extra") is None:
                raise ValidationError("'extra_bonus' bonus symbols require an extra amount.", "extra")

class StandardSymbolProbabilitySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    column = fields.Int(required=True, strict=True)
    row = fields.Int(required=True, strict=True)
    symbols = WeightTableField(required=True)

class BonusSymbolProbabilitySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    symbols = WeightTableField(required=True)

class ProbabilitiesSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    standard_symbols = fields.List(
        fields.Nested(StandardSymbolProbabilitySchema),
        required=True,
        validate=Length(min=1, error="At least one standard symbol weight table is required.")
    )
    bonus_symbols = fields.Nested(BonusSymbolProbabilitySchema, load_default=None)

class WinCombinationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    when = fields.Str(required=True)
    reward_multiplier = fields.Float(required=True, validate=Range(min=0, min_inclusive=False))
    count = fields.Int(load_default=None, strict=True)
    group = fields.Str(load_default=None)
    covered_areas = fields.List(fields.List(CoordinateField()), load_default=None)

    @validates_schema
    def validate_combination_kind(self, data, **kwargs):
        when = data.get("when")
        if when == SameSymbolsCombination.when:
            count = data.get("count")
            if count is None or count <= 0:
                raise ValidationError("'same_symbols' combinations require a positive count.", "count")
        elif when == LinearSymbolsCombination.when:
            areas = data.get("covered_areas")
            if not areas:
                raise ValidationError("'linear_symbols' combinations require covered_areas.", "covered_areas")
            if any(not area for area in areas):
                raise ValidationError("Covered areas must not be empty.", "covered_areas")

class GameConfigSchema(Schema):
    """Loads a configuration document and resolves it into a ``GameConfig``."""

    class Meta:
        unknown = EXCLUDE

    rows = fields.Int(load_default=3, strict=True, validate=Range(min=1, error="rows must be a positive integer."))
    columns = fields.Int(load_default=3, strict=True, validate=Range(min=1, error="columns must be a positive integer."))
    symbols = fields.Dict(
        keys=fields.Str(), values=fields.Nested(SymbolSchema),
        required=True, validate=Length(min=1, error="At least one symbol is required.")
    )
    probabilities = fields.Nested(ProbabilitiesSchema, required=True)
    win_combinations = fields.Dict(
        keys=fields.Str(), values=fields.Nested(WinCombinationSchema), load_default=dict
    )

    @post_load
    def make_game_config(self, data, **kwargs):
        probabilities = data["probabilities"]
        bonus_table = probabilities.get("bonus_symbols")
        return GameConfig(
            rows=data["rows"],
            columns=data["columns"],
            symbols={name: _make_symbol(name, sym) for name, sym in data["symbols"].items()},
            standard_probabilities=tuple(
                CellProbability(row=cell["row"], column=cell["column"], weights=cell["symbols"])
                for cell in probabilities["standard_symbols"]
            ),
            bonus_probabilities=bonus_table["symbols"] if bonus_table else None,
            win_combinations={
                name: _make_win_combination(name, combo)
                for name, combo in data["win_combinations"].items()
            },
        )

def _make_symbol(name, data):
    if data["type"] == "standard":
        return StandardSymbol(name=name, reward_multiplier=data["reward_multiplier"])
    reward_multiplier = data.get("reward_multiplier")
    extra = data.get("extra")
    return BonusSymbol(
        name=name,
        impact=BonusImpact.from_config(data.get("impact")),
        reward_multiplier=reward_multiplier if reward_multiplier is not None else 1.0,
        extra=extra if extra is not None else 0.0,
    )

def _make_win_combination(name, data):
    when = data["when"]
    if when == SameSymbolsCombination.when:
        return SameSymbolsCombination(
            name=name, reward_multiplier=data["reward_multiplier"],
            count=data["count"], group=data.get("group")
        )
    if when == LinearSymbolsCombination.when:
        return LinearSymbolsCombination(
            name=name, reward_multiplier=data["reward_multiplier"],
            covered_areas=tuple(tuple(area) for area in data["covered_areas"]),
            group=data.get("group")
        )
    return UnsupportedCombination(
        name=name, reward_multiplier=data["reward_multiplier"], when=when, group=data.get("group")
    )

# --- Play Schemas ---
class PlayRequestSchema(Schema):
    betting_amount = fields.Float(
        required=True,
        validate=Range(min=0, min_inclusive=False, error="Betting amount must be a positive number.")
    )
    seed = fields.Int(load_default=None)

class SimulationRequestSchema(PlayRequestSchema):
    rounds = fields.Int(
        required=True, strict=True,
        validate=Range(min=1, max=10_000_000, error="Rounds must be between 1 and 10,000,000.")
    )

class GameResultSchema(Schema):
    matrix = fields.List(fields.List(fields.Str()))
    reward = fields.Float()
    applied_winning_combinations = fields.Dict(keys=fields.Str(), values=fields.List(fields.Str()))
    applied_bonus_symbol = fields.Str(allow_none=True)

class SimulationReportSchema(Schema):
    rounds = fields.Int()
    bet_amount = fields.Float()
    total_bet = fields.Float()
    total_win = fields.Float()
    rtp = fields.Float()
    hit_count = fields.Int()
    hit_frequency = fields.Float()
    bonus_hit_count = fields.Int()
    bonus_frequency = fields.Float()
    average_win = fields.Float()
    max_win = fields.Float()
    volatility_index = fields.Float()
    wins_by_multiplier = fields.Dict(keys=fields.Str(), values=fields.Int())
    combination_hits = fields.Dict(keys=fields.Str(), values=fields.Int())
