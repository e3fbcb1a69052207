"""
Secret pattern registry

Compiles categorized regular expressions into an immutable registry and
provides the built-in default pattern set.

References:
- GitHub Secret Scanning
- GitLab Secret Detection
- truffleHog
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Pattern

import yaml

from secrets_guardian.config.pattern_loader import (
    GuardianConfig,
    load_guardian_config,
    parse_guardian_config,
)
from secrets_guardian.logging import get_logger

logger = get_logger(__name__)

PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE

# Built-in patterns, used whenever the configuration cannot be loaded.
DEFAULT_PATTERNS: dict[str, list[str]] = {
    "aws_credentials": [
        r"AKIA[0-9A-Z]{16}",
        r"AWS_SECRET_ACCESS_KEY\s*[=:]\s*['\"]?[A-Za-z0-9/+=]{8,}",
    ],
    "api_keys": [
        r"sk-[a-zA-Z0-9]{48}",
        r"sk-ant-[a-zA-Z0-9_-]{20,}",
        r"api[_-]?key\s*[=:]\s*['\"]?[a-zA-Z0-9_\-]{12,}",
    ],
    "github_tokens": [
        r"ghp_[a-zA-Z0-9]{36}",
        r"gho_[a-zA-Z0-9]{36}",
        r"ghu_[a-zA-Z0-9]{36}",
        r"ghs_[a-zA-Z0-9]{36}",
        r"github_pat_[a-zA-Z0-9_]{22,}",
    ],
    "slack_tokens": [
        r"xox[baprs]-[a-zA-Z0-9-]{10,}",
    ],
    "database_urls": [
        r"DATABASE_URL\s*=\s*[a-z][a-z0-9+.-]*://[^\s'\"]+",
        r"mongodb(?:\+srv)?://[^\s'\"]+",
        r"postgres(?:ql)?://[^\s'\"]+",
        r"mysql://[^\s'\"]+",
    ],
    "private_keys": [
        r"-----BEGIN\s+(?:RSA\s+|EC\s+|DSA\s+|OPENSSH\s+|ENCRYPTED\s+)?PRIVATE\s+KEY-----",
        r"PRIVATE_KEY\s*=\s*[A-Za-z0-9+/=\n\r-]{50,}",
    ],
    "passwords": [
        r"(?:password|passwd)\w*\s*[=:]\s*['\"]?[^\s'\"$]{6,}",
    ],
    "jwt_secrets": [
        r"JWT_SECRET\s*[=:]\s*['\"]?[a-zA-Z0-9_\-]{16,}",
        r"SECRET_KEY\s*[=:]\s*['\"]?[a-zA-Z0-9_\-]{16,}",
        r"eyJ[a-zA-Z0-9_-]{10,}(?:\.[a-zA-Z0-9_-]{10,}){0,2}",
    ],
}


@dataclass(frozen=True)
class CompiledPattern:
    """A single compiled detection pattern."""

    category: str
    source: str
    pattern: Pattern

    def finditer(self, text: str):
        """Iterate non-overlapping matches left to right."""
        return self.pattern.finditer(text)


@dataclass(frozen=True)
class RejectedPattern:
    """A pattern source that could not be compiled."""

    category: str
    source: Any
    reason: str


@dataclass(frozen=True)
class PatternRegistry:
    """Immutable, ordered set of compiled patterns grouped by category.

    Attributes:
        categories: Category name -> compiled patterns, in configuration order.
        rejected: Sources dropped because they failed to compile.
        preview_length: Optional preview length override from configuration.
        recommendations: Optional remediation list override from configuration.
        is_default: Whether this registry was built from DEFAULT_PATTERNS.
    """

    categories: Mapping[str, tuple[CompiledPattern, ...]]
    rejected: tuple[RejectedPattern, ...] = ()
    preview_length: int | None = None
    recommendations: tuple[str, ...] | None = None
    is_default: bool = False

    def __iter__(self):
        for patterns in self.categories.values():
            yield from patterns

    def __len__(self) -> int:
        return sum(len(p) for p in self.categories.values())

    def category_names(self) -> list[str]:
        return list(self.categories)

    def get_category(self, name: str) -> tuple[CompiledPattern, ...]:
        return self.categories.get(name, ())


def compile_patterns(
    pattern_groups: Mapping[str, list[Any]],
    *,
    preview_length: int | None = None,
    recommendations: list[str] | None = None,
    is_default: bool = False,
) -> PatternRegistry:
    """Compile categorized regex sources into a registry.

    Each source is compiled on its own; a source that fails to compile is
    recorded in ``rejected`` and the remaining sources are still compiled.

    Args:
        pattern_groups: Mapping of category name to a list of regex sources.
        preview_length: Optional preview length override.
        recommendations: Optional remediation list override.
        is_default: Marks the registry as built from the defaults.

    Returns:
        PatternRegistry with the compiled patterns.
    """
    categories: dict[str, tuple[CompiledPattern, ...]] = {}
    rejected: list[RejectedPattern] = []

    for category, sources in pattern_groups.items():
        compiled = []
        for source in sources:
            if not isinstance(source, str):
                reason = f"expected str, got {type(source).__name__}"
                logger.debug(
                    f"Failed to compile pattern in {category}: {source!r} ({reason})"
                )
                rejected.append(RejectedPattern(category, source, reason))
                continue
            try:
                compiled.append(
                    CompiledPattern(category, source, re.compile(source, PATTERN_FLAGS))
                )
            except re.error as e:
                logger.debug(f"Failed to compile pattern in {category}: {source} ({e})")
                rejected.append(RejectedPattern(category, source, str(e)))
        categories[category] = tuple(compiled)

    return PatternRegistry(
        categories=categories,
        rejected=tuple(rejected),
        preview_length=preview_length,
        recommendations=tuple(recommendations) if recommendations is not None else None,
        is_default=is_default,
    )


_default_registry: PatternRegistry | None = None


def get_default_registry() -> PatternRegistry:
    """Get the compiled built-in registry."""
    global _default_registry

    if _default_registry is None:
        _default_registry = compile_patterns(DEFAULT_PATTERNS, is_default=True)

    return _default_registry


def _registry_from_config(config: GuardianConfig) -> PatternRegistry:
    return compile_patterns(
        config.patterns,
        preview_length=config.preview_length,
        recommendations=config.recommendations,
    )


def load_registry(source: Path | str | Mapping[str, Any] | None = None) -> PatternRegistry:
    """Load the pattern registry, falling back to the built-in defaults.

    Args:
        source: Path to a YAML/JSON configuration file, an already loaded
            configuration mapping, or None for the defaults.

    Returns:
        A non-empty PatternRegistry. Never raises.
    """
    if source is None:
        return get_default_registry()

    try:
        if isinstance(source, Mapping):
            config = parse_guardian_config(source)
        else:
            config = load_guardian_config(source)
    except FileNotFoundError as e:
        logger.warning(f"Pattern configuration not found, using defaults: {e}")
        return get_default_registry()
    except (ValueError, OSError, yaml.YAMLError) as e:
        logger.warning(f"Invalid pattern configuration, using defaults: {e}")
        return get_default_registry()

    registry = _registry_from_config(config)
    if len(registry) == 0:
        logger.warning("Pattern configuration compiled to zero patterns, using defaults")
        return get_default_registry()

    logger.debug(
        f"Compiled {len(registry)} patterns in {len(registry.categories)} categories",
        extra={"rejected": len(registry.rejected)},
    )
    return registry
