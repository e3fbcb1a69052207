"""
secrets-guardian: keep credentials out of AI-assisted edits

A Claude Code hook that scans file writes, edits, shell commands, prompts
and assistant responses for exposed secrets and blocks the action when it
finds any.
"""

__version__ = "2.0.0"

from secrets_guardian.core.secret_scanner import (
    Finding,
    PatternRegistry,
    ScanResult,
    SecretInterceptor,
    SecretScanner,
    load_registry,
)

__all__ = [
    "Finding",
    "PatternRegistry",
    "ScanResult",
    "SecretInterceptor",
    "SecretScanner",
    "load_registry",
]
