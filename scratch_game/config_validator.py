"""
Validation of the environment-driven settings.

Every ``SCRATCH_*`` variable is checked at once; errors are collected and
reported together rather than failing on the first bad value.
"""

import logging
import os
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMATS = ('text', 'json')

DEFAULT_LOG_LEVEL = 'WARNING'
DEFAULT_LOG_FORMAT = 'text'
DEFAULT_SIMULATION_ROUNDS = 10000
MAX_SIMULATION_ROUNDS = 10_000_000


class ConfigValidationError(Exception):
    """Raised when one or more settings are invalid."""
    pass


class ConfigValidator:
    """Validates settings read from the environment."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        Args:
            environ: Mapping to read from; ``os.environ`` when omitted.
        """
        self.environ = os.environ if environ is None else environ
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def _get(self, var_name: str) -> Optional[str]:
        value = self.environ.get(var_name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def validate_log_level(self) -> str:
        value = self._get('SCRATCH_LOG_LEVEL')
        if value is None:
            return DEFAULT_LOG_LEVEL
        level = value.upper()
        if level not in LOG_LEVELS:
            self.errors.append(
                f"SCRATCH_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got '{value}')"
            )
            return DEFAULT_LOG_LEVEL
        return level

    def validate_log_format(self) -> str:
        value = self._get('SCRATCH_LOG_FORMAT')
        if value is None:
            return DEFAULT_LOG_FORMAT
        log_format = value.lower()
        if log_format not in LOG_FORMATS:
            self.errors.append(
                f"SCRATCH_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)} (got '{value}')"
            )
            return DEFAULT_LOG_FORMAT
        return log_format

    def validate_simulation_rounds(self) -> int:
        value = self._get('SCRATCH_SIMULATION_ROUNDS')
        if value is None:
            return DEFAULT_SIMULATION_ROUNDS
        try:
            rounds = int(value)
        except ValueError:
            self.errors.append(f"SCRATCH_SIMULATION_ROUNDS must be an integer (got '{value}')")
            return DEFAULT_SIMULATION_ROUNDS
        if rounds <= 0:
            self.errors.append(f"SCRATCH_SIMULATION_ROUNDS must be positive (got {rounds})")
            return DEFAULT_SIMULATION_ROUNDS
        if rounds > MAX_SIMULATION_ROUNDS:
            self.warnings.append(
                f"SCRATCH_SIMULATION_ROUNDS={rounds} is very large; simulations may take a long time"
            )
        return rounds

    def validate_random_seed(self) -> Optional[int]:
        value = self._get('SCRATCH_RANDOM_SEED')
        if value is None:
            return None
        try:
            seed = int(value)
        except ValueError:
            self.errors.append(f"SCRATCH_RANDOM_SEED must be an integer (got '{value}')")
            return None
        return seed

    def validate_all(self) -> dict:
        """
        Validate all settings.

        Returns:
            Dictionary of validated setting values.

        Raises:
            ConfigValidationError: If any setting is invalid.
        """
        config = {
            'LOG_LEVEL': self.validate_log_level(),
            'LOG_FORMAT': self.validate_log_format(),
            'SIMULATION_ROUNDS': self.validate_simulation_rounds(),
            'RANDOM_SEED': self.validate_random_seed(),
        }

        if self.errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in self.errors)
            if self.warnings:
                error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warning}" for warning in self.warnings)
            raise ConfigValidationError(error_msg)

        for warning in self.warnings:
            logger.warning(warning)

        return config
