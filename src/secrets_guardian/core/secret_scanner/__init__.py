"""
Secret scanning module

Detects exposed credentials (API keys, tokens, private keys, connection
strings, passwords) in text before it leaves the editor.

Main components:
- PatternRegistry: compiled, categorized detection patterns
- SecretScanner: applies the registry to text
- Finding / ScanResult: scan output
- SecretInterceptor: turns scan results into hook decisions
"""

from secrets_guardian.core.secret_scanner.patterns import (
    DEFAULT_PATTERNS,
    CompiledPattern,
    PatternRegistry,
    RejectedPattern,
    compile_patterns,
    get_default_registry,
    load_registry,
)
from secrets_guardian.core.secret_scanner.scanner import (
    RECOMMENDATIONS,
    Finding,
    ScanResult,
    ScanStatus,
    SecretScanner,
)
from secrets_guardian.core.secret_scanner.interceptor import (
    HookDecision,
    HookOutcome,
    SecretInterceptor,
    processing_error,
    timeout_decision,
)

__all__ = [
    "DEFAULT_PATTERNS",
    "RECOMMENDATIONS",
    "CompiledPattern",
    "PatternRegistry",
    "RejectedPattern",
    "Finding",
    "ScanResult",
    "ScanStatus",
    "SecretScanner",
    "HookDecision",
    "HookOutcome",
    "SecretInterceptor",
    "compile_patterns",
    "get_default_registry",
    "load_registry",
    "processing_error",
    "timeout_decision",
]
