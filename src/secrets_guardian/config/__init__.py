"""Configuration module for secrets-guardian."""

from secrets_guardian.config.pattern_loader import (
    GuardianConfig,
    load_guardian_config,
    load_guardian_config_safe,
    parse_guardian_config,
)
from secrets_guardian.config.settings import GuardianSettings, validate_environment

__all__ = [
    "GuardianConfig",
    "GuardianSettings",
    "load_guardian_config",
    "load_guardian_config_safe",
    "parse_guardian_config",
    "validate_environment",
]
