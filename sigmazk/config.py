"""
Toolkit configuration
Values are read from the environment once, at import time.
"""

import hashlib
import logging
import os

from .errors import ConfigurationError

# Default configuration
DEFAULT_HASH = os.getenv('SIGMAZK_HASH', 'sha256')
DEFAULT_LOG_LEVEL = os.getenv('SIGMAZK_LOG_LEVEL', 'WARNING')

# Emit debug records of public transcript values (commitments, challenges,
# responses). Secrets and blindings are never logged.
TRACE = os.getenv('SIGMAZK_TRACE', 'false').lower() == 'true'

_LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


class Config:
    """Configuration for challenge hashing and logging."""

    def __init__(self):
        self.hash_name = DEFAULT_HASH
        self.log_level = DEFAULT_LOG_LEVEL
        self.trace = TRACE

    def validate(self):
        if self.hash_name not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unknown hash algorithm: {self.hash_name}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    def new_hash(self, hash_name: str = None):
        """Return a fresh digest object for ``hash_name`` (or the configured one)."""
        name = hash_name or self.hash_name
        try:
            return hashlib.new(name)
        except ValueError as e:
            raise ConfigurationError(f"Unknown hash algorithm: {name}") from e


def configure_logging(level: str = None) -> logging.Logger:
    """
    Attach a stream handler to the ``sigmazk`` logger.

    The root logger is left alone; applications that already configure
    logging do not need to call this. The global configuration is
    validated first, so a bad ``SIGMAZK_HASH`` or ``SIGMAZK_LOG_LEVEL``
    raises ConfigurationError here rather than at the first proof.
    """
    config.validate()
    level = (level or config.log_level).upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {level}")

    logger = logging.getLogger('sigmazk')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


# Global configuration instance
config = Config()
