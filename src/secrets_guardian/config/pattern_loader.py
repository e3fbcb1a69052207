"""Configuration loader for secret detection patterns.

This module loads categorized detection patterns from a YAML configuration
file. JSON is a subset of YAML, so the same loader accepts the JSON
``secrets-guardian.json`` files installed next to the hook.

Example YAML configuration:

    patterns:
      aws_credentials:
        - "AKIA[0-9A-Z]{16}"
      database_urls:
        - "mongodb://[^\\s]+"
        - "postgres://[^\\s]+"
    preview_length: 50
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


@dataclass
class GuardianConfig:
    """Pattern configuration for the secrets guardian.

    Attributes:
        patterns: Category name -> regex sources, in file order. Sources are
            kept as written; compilation happens in the registry.
        preview_length: Maximum length of a finding preview, if overridden.
        recommendations: Remediation hints shown on block, if overridden.
    """

    patterns: dict[str, list[Any]] = field(default_factory=dict)
    preview_length: Optional[int] = None
    recommendations: Optional[list[str]] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.preview_length is not None and self.preview_length < 4:
            raise ValueError(
                f"preview_length must be at least 4, got {self.preview_length}"
            )


def parse_guardian_config(data: Mapping[str, Any]) -> GuardianConfig:
    """Build a GuardianConfig from an already parsed mapping.

    Args:
        data: Mapping with a ``patterns`` key.

    Returns:
        GuardianConfig instance.

    Raises:
        ValueError: If the structure is invalid.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Invalid configuration structure: expected dict, got {type(data).__name__}")

    patterns_data = data.get("patterns")

    if patterns_data is None:
        raise ValueError("Configuration missing required field: patterns")

    if not isinstance(patterns_data, Mapping):
        raise ValueError(
            f"Invalid patterns structure: expected dict, got {type(patterns_data).__name__}"
        )

    patterns: dict[str, list[Any]] = {}
    for category, sources in patterns_data.items():
        if not isinstance(sources, list):
            raise ValueError(
                f"Category {category!r} is not a list: {type(sources).__name__}"
            )
        patterns[str(category)] = list(sources)

    preview_length = data.get("preview_length")
    if preview_length is not None and (
        isinstance(preview_length, bool) or not isinstance(preview_length, int)
    ):
        raise ValueError(f"preview_length must be an integer, got {preview_length!r}")

    recommendations = data.get("recommendations")
    if recommendations is not None:
        if not isinstance(recommendations, list) or not all(
            isinstance(r, str) for r in recommendations
        ):
            raise ValueError("recommendations must be a list of strings")

    return GuardianConfig(
        patterns=patterns,
        preview_length=preview_length,
        recommendations=recommendations,
    )


def load_guardian_config(path: Path | str) -> GuardianConfig:
    """Load the pattern configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file.

    Returns:
        GuardianConfig instance.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the structure is invalid.
        yaml.YAMLError: If the file is malformed.

    Example:
        >>> config = load_guardian_config("~/.claude/hooks/secrets-guardian.json")
        >>> for category, sources in config.patterns.items():
        ...     print(f"{category}: {len(sources)}")
    """
    path = Path(path).expanduser()

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Configuration file is empty: {path}")

    return parse_guardian_config(data)


def load_guardian_config_safe(path: Path | str) -> tuple[Optional[GuardianConfig], Optional[str]]:
    """Load the configuration, returning any error message instead of raising.

    Args:
        path: Path to the configuration file.

    Returns:
        Tuple of (config, error_message). If successful, error_message is None.
        If failed, config is None.

    Example:
        >>> config, error = load_guardian_config_safe("secrets-guardian.yaml")
        >>> if error:
        ...     print(f"Warning: {error}")
    """
    try:
        return load_guardian_config(path), None
    except FileNotFoundError as e:
        return None, str(e)
    except ValueError as e:
        return None, f"Configuration error: {e}"
    except yaml.YAMLError as e:
        return None, f"YAML parsing error: {e}"
    except OSError as e:
        return None, f"Unable to read configuration: {e}"
