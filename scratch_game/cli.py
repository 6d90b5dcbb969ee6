"""
Scratch Game CLI

Command-line entry point for playing and analysing scratch game configurations:
- play: generate one grid and print the result as JSON
- simulate: play many rounds and report RTP and payout statistics
- validate: check a configuration file and summarise it

Usage:
    scratch-game --help
    scratch-game play --config config.json --betting-amount 100
    scratch-game simulate --config config.json --betting-amount 1 --rounds 100000 --seed 7
    scratch-game validate --config config.json
"""

import json
import logging
import random
import sys

import click
from marshmallow import ValidationError

from scratch_game.config import Settings
from scratch_game.config_validator import ConfigValidationError
from scratch_game.exceptions import AppException, GameLogicException, ValidationException
from scratch_game.logging_config import configure_logging
from scratch_game.models import BonusSymbol, LinearSymbolsCombination, SameSymbolsCombination
from scratch_game.schemas import (
    GameResultSchema, PlayRequestSchema, SimulationReportSchema, SimulationRequestSchema
)
from scratch_game.utils.config_loader import load_game_config
from scratch_game.utils.game_engine import GameEngine
from scratch_game.utils.game_tester import GameTester

logger = logging.getLogger(__name__)


def _fail(exc: AppException):
    click.echo(f"Error [{exc.error_code}]: {exc.status_message}", err=True)
    if exc.details:
        click.echo(json.dumps(exc.details, indent=2, default=str), err=True)
    sys.exit(exc.exit_code)


def _load_request(schema, data):
    try:
        return schema.load(data)
    except ValidationError as err:
        raise ValidationException("Invalid command arguments", details=err.messages)


def _run(action):
    try:
        return action()
    except AppException as exc:
        _fail(exc)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.exception("Unexpected error while running command")
        _fail(GameLogicException(f"Unexpected error: {exc}"))


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """Scratch Game - play and analyse scratch game configurations."""
    ctx.ensure_object(dict)
    try:
        settings = Settings.from_env()
    except ConfigValidationError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    configure_logging('DEBUG' if verbose else settings.LOG_LEVEL, settings.LOG_FORMAT)
    ctx.obj['verbose'] = verbose
    ctx.obj['settings'] = settings


@cli.command()
@click.option('--config', 'config_path', required=True, type=click.Path(dir_okay=False), help='Game configuration JSON file')
@click.option('--betting-amount', required=True, type=float, help='Stake for the round')
@click.option('--seed', type=int, default=None, help='Seed for a reproducible round')
@click.option('--indent', type=int, default=2, show_default=True, help='JSON indentation of the result')
@click.pass_context
def play(ctx, config_path, betting_amount, seed, indent):
    """Play a single round and print the result as JSON."""
    settings = ctx.obj['settings']

    def action():
        request = _load_request(PlayRequestSchema(), {
            'betting_amount': betting_amount,
            'seed': seed if seed is not None else settings.RANDOM_SEED,
        })
        engine = GameEngine(load_game_config(config_path))
        rng = random.Random(request['seed']) if request['seed'] is not None else None
        result = engine.play(request['betting_amount'], rng=rng)
        return GameResultSchema().dump(result)

    output = _run(action)
    click.echo(json.dumps(output, indent=indent if indent > 0 else None))


@cli.command()
@click.option('--config', 'config_path', required=True, type=click.Path(dir_okay=False), help='Game configuration JSON file')
@click.option('--betting-amount', required=True, type=float, help='Stake for every round')
@click.option('--rounds', type=int, default=None, help='Number of rounds (defaults to SCRATCH_SIMULATION_ROUNDS)')
@click.option('--seed', type=int, default=None, help='Seed for a reproducible run')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.pass_context
def simulate(ctx, config_path, betting_amount, rounds, seed, as_json):
    """Play many rounds and report RTP, hit frequency and volatility."""
    settings = ctx.obj['settings']

    def action():
        request = _load_request(SimulationRequestSchema(), {
            'betting_amount': betting_amount,
            'rounds': rounds if rounds is not None else settings.SIMULATION_ROUNDS,
            'seed': seed if seed is not None else settings.RANDOM_SEED,
        })
        tester = GameTester(
            load_game_config(config_path),
            num_rounds=request['rounds'],
            bet_amount=request['betting_amount'],
            seed=request['seed'],
        )
        return tester.run_simulation()

    tester = _run(action)
    if as_json:
        click.echo(json.dumps(SimulationReportSchema().dump(tester.to_dict()), indent=2))
    else:
        for line in tester.summary_lines():
            click.echo(line)


@cli.command()
@click.option('--config', 'config_path', required=True, type=click.Path(dir_okay=False), help='Game configuration JSON file')
def validate(config_path):
    """Check a configuration file and print a summary."""
    def action():
        config = load_game_config(config_path)
        GameEngine(config)
        return config

    config = _run(action)
    standard = sorted(name for name, symbol in config.symbols.items() if not isinstance(symbol, BonusSymbol))
    bonus = sorted(name for name, symbol in config.symbols.items() if isinstance(symbol, BonusSymbol))

    click.echo(f"Configuration OK: {config_path}")
    click.echo(f"Grid: {config.rows}x{config.columns}")
    click.echo(f"Standard symbols: {', '.join(standard) or '-'}")
    click.echo(f"Bonus symbols: {', '.join(bonus) or '-'}")
    click.echo(f"Weight tables: {len(config.standard_probabilities)} standard, "
               f"{'1 bonus' if config.bonus_probabilities is not None else 'no bonus'}")
    click.echo("Win combinations:")
    for name, combination in config.win_combinations.items():
        if isinstance(combination, SameSymbolsCombination):
            kind = f"same_symbols, count {combination.count}"
        elif isinstance(combination, LinearSymbolsCombination):
            kind = f"linear_symbols, {len(combination.covered_areas)} areas"
        else:
            kind = f"unsupported '{combination.when}', never matches"
        click.echo(f"  {name}: x{combination.reward_multiplier:g} ({kind})")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
