import json
import logging
import os

from marshmallow import ValidationError

from scratch_game.exceptions import ConfigNotFoundException, ConfigurationException
from scratch_game.models import GameConfig
from scratch_game.schemas import GameConfigSchema

logger = logging.getLogger(__name__)


def load_game_config(config_path) -> GameConfig:
    """
    Loads a game configuration JSON file and resolves it into a ``GameConfig``.

    Args:
        config_path (str): Path to the configuration document.

    Returns:
        GameConfig: The validated, resolved configuration.

    Raises:
        ConfigNotFoundException: If no file exists at ``config_path``.
        ConfigurationException: If the file is not valid JSON or fails validation.
    """
    if not os.path.isfile(config_path):
        logger.error("Game configuration not found at %s", config_path)
        raise ConfigNotFoundException(
            f"Configuration file not found at {config_path}",
            details={"config_path": str(config_path)}
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Malformed JSON in %s: %s", config_path, e)
        raise ConfigurationException(
            f"Invalid JSON in configuration file {config_path}: {e.msg} (line {e.lineno}, column {e.colno})",
            details={"config_path": str(config_path)}
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationException(
            f"Configuration file {config_path} is not valid UTF-8 text: {e}",
            details={"config_path": str(config_path)}
        ) from e
    except OSError as e:
        raise ConfigNotFoundException(
            f"Configuration file {config_path} could not be read: {e}",
            details={"config_path": str(config_path)}
        ) from e

    config = parse_game_config(raw_config, source=str(config_path))
    logger.info(
        "Loaded game configuration from %s: %dx%d grid, %d symbols, %d win combinations",
        config_path, config.rows, config.columns, len(config.symbols), len(config.win_combinations)
    )
    return config


def parse_game_config(raw_config, source="<memory>") -> GameConfig:
    """Validates an already decoded configuration document."""
    if not isinstance(raw_config, dict):
        raise ConfigurationException(
            "Game configuration must be a JSON object.",
            details={"source": source}
        )
    try:
        return GameConfigSchema().load(raw_config)
    except ValidationError as err:
        logger.error("Game configuration %s failed validation: %s", source, err.messages)
        raise ConfigurationException(
            "Invalid game configuration",
            details={"source": source, "errors": err.messages}
        ) from err
