"""Runtime settings for the secrets guardian.

Settings are read once from the environment at startup and passed
explicitly to the hook and the registry loader.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "SECRETS_GUARDIAN_"

# Claude Code kills hooks after 60 seconds; stay well below that.
HOST_TIMEOUT = 60.0
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_FILE_SIZE = 1024 * 1024

VALID_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}
VALID_LOG_FORMATS = {"json", "text"}


def default_config_path() -> Path:
    return Path.home() / ".claude" / "hooks" / "secrets-guardian.json"


def default_log_file() -> Path:
    return Path.home() / ".claude" / "guardian-debug.log"


@dataclass(frozen=True)
class GuardianSettings:
    """Settings for one guardian invocation.

    Attributes:
        config_path: Pattern configuration file, or None for the defaults.
        timeout: Seconds before the hook gives up and allows the action.
        debug: Enables debug logging to ``log_file``.
        log_file: Log destination; stderr when None.
        log_level: Logging level name.
        json_logs: Whether logs are JSON formatted.
        max_file_size: Files above this size are skipped by ``scan --file``.
    """

    config_path: Optional[Path] = None
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    log_file: Optional[Path] = None
    log_level: str = "ERROR"
    json_logs: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GuardianSettings":
        """Read settings from environment variables.

        Invalid values are replaced by their defaults; use
        ``validate_environment`` to report them.
        """
        env = os.environ if environ is None else environ

        debug = _env(env, "DEBUG", "false").lower() == "true"

        config_path = _env(env, "CONFIG", "")
        log_file = _env(env, "LOG_FILE", "")
        if not log_file and debug:
            log_file = str(default_log_file())

        log_level = _env(env, "LOG_LEVEL", "debug" if debug else "error").lower()
        if log_level not in VALID_LOG_LEVELS:
            log_level = "debug" if debug else "error"

        return cls(
            config_path=Path(config_path).expanduser() if config_path else default_config_path(),
            timeout=_timeout(_env(env, "TIMEOUT", "")),
            debug=debug,
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=log_level.upper(),
            json_logs=_env(env, "LOG_FORMAT", "json").lower() != "text",
            max_file_size=int(_positive_float(_env(env, "MAX_FILE_SIZE", ""), DEFAULT_MAX_FILE_SIZE)),
        )


def _env(env: Mapping[str, str], name: str, default: str) -> str:
    return env.get(ENV_PREFIX + name, default)


def _positive_float(raw: str, default: float) -> float:
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 and math.isfinite(value) else default


def _timeout(raw: str) -> float:
    timeout = _positive_float(raw, DEFAULT_TIMEOUT)
    return timeout if timeout < HOST_TIMEOUT else DEFAULT_TIMEOUT


def validate_environment(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Validate guardian environment variables.

    Returns:
        List of validation error messages (empty if all valid).
    """
    env = os.environ if environ is None else environ
    errors = []

    timeout_str = _env(env, "TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout_str)
        if timeout <= 0:
            errors.append(f"{ENV_PREFIX}TIMEOUT must be positive, got: {timeout}")
        elif timeout >= HOST_TIMEOUT:
            errors.append(
                f"{ENV_PREFIX}TIMEOUT must be below the host's {HOST_TIMEOUT:g} second limit, got: {timeout}"
            )
    except ValueError:
        errors.append(f"{ENV_PREFIX}TIMEOUT must be a number, got: {timeout_str}")

    size_str = _env(env, "MAX_FILE_SIZE", str(DEFAULT_MAX_FILE_SIZE))
    try:
        if int(size_str) <= 0:
            errors.append(f"{ENV_PREFIX}MAX_FILE_SIZE must be positive, got: {size_str}")
    except ValueError:
        errors.append(f"{ENV_PREFIX}MAX_FILE_SIZE must be an integer, got: {size_str}")

    log_level = _env(env, "LOG_LEVEL", "error").lower()
    if log_level not in VALID_LOG_LEVELS:
        errors.append(f"{ENV_PREFIX}LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}, got: {log_level}")

    log_format = _env(env, "LOG_FORMAT", "json").lower()
    if log_format not in VALID_LOG_FORMATS:
        errors.append(f"{ENV_PREFIX}LOG_FORMAT must be one of {sorted(VALID_LOG_FORMATS)}, got: {log_format}")

    return errors
