"""
Runtime settings for the scratch game CLI.

Values come from the environment, after ``.env`` has been loaded, and are
validated by ``ConfigValidator`` before use.
"""
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from scratch_game.config_validator import (
    ConfigValidator, DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL, DEFAULT_SIMULATION_ROUNDS
)


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL
    LOG_FORMAT: str = DEFAULT_LOG_FORMAT
    SIMULATION_ROUNDS: int = DEFAULT_SIMULATION_ROUNDS
    RANDOM_SEED: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None, load_env_file=True) -> "Settings":
        """
        Builds validated settings.

        Raises:
            ConfigValidationError: If a ``SCRATCH_*`` variable is invalid.
        """
        if load_env_file and environ is None:
            load_dotenv()
        validated = ConfigValidator(environ).validate_all()
        return cls(**validated)


@dataclass(frozen=True)
class TestingSettings(Settings):
    LOG_LEVEL: str = 'DEBUG'
    SIMULATION_ROUNDS: int = 200
    RANDOM_SEED: Optional[int] = 1234
