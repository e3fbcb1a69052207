"""
Secret interceptor

Turns scan results and hook failures into the three-way outcome reported
to the host: allow, block, or a non-blocking error.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from secrets_guardian.core.secret_scanner.scanner import ScanResult, SecretScanner
from secrets_guardian.logging import get_logger

logger = get_logger(__name__)

BLOCK_TITLE = "SECURITY ALERT: Secrets Detected"
BLOCK_ACTION = "Operation blocked to prevent secret exposure"


class HookOutcome(IntEnum):
    """Hook outcome, valued as the process exit code.

    Claude Code blocks the action on exit code 2, shows stderr without
    blocking on any other non-zero code, and proceeds silently on 0.
    """
    ALLOW = 0
    ERROR = 1
    BLOCK = 2


@dataclass(frozen=True)
class HookDecision:
    """Final decision for one hook invocation"""
    outcome: HookOutcome
    diagnostic: dict[str, Any] | None = None
    scan_result: ScanResult | None = None

    @property
    def blocked(self) -> bool:
        return self.outcome is HookOutcome.BLOCK

    @property
    def exit_code(self) -> int:
        return int(self.outcome)


ALLOW = HookDecision(HookOutcome.ALLOW)


def processing_error(error: BaseException) -> HookDecision:
    """Non-blocking decision for a failure while handling the event."""
    logger.warning(f"Hook processing error: {error}", extra={"error_type": type(error).__name__})
    return HookDecision(
        HookOutcome.ERROR,
        diagnostic={
            "error": "Hook processing error",
            "message": str(error) or type(error).__name__,
        },
    )


def timeout_decision(seconds: float) -> HookDecision:
    """Non-blocking decision for a hook that ran out of time."""
    logger.warning(f"Hook timed out after {seconds:g} seconds")
    return HookDecision(
        HookOutcome.ERROR,
        diagnostic={
            "error": "Hook timeout",
            "message": f"Guardian hook timed out after {seconds:g} seconds",
        },
    )


class SecretInterceptor:
    """Secret interceptor

    Scans hook content and decides whether the action may proceed.

    Example:
        >>> interceptor = SecretInterceptor()
        >>> decision = interceptor.check_text("export DB_PASSWORD=supersecret123")
        >>> decision.outcome
        <HookOutcome.BLOCK: 2>
    """

    def __init__(
        self,
        scanner: SecretScanner | None = None,
        enable_logging: bool = True,
    ):
        """Initialise the interceptor.

        Args:
            scanner: Scanner instance
            enable_logging: Whether blocks are logged
        """
        self._scanner = scanner or SecretScanner()
        self._enable_logging = enable_logging

        self._stats = {
            "total_scans": 0,
            "total_blocks": 0,
            "total_findings": 0,
        }

    @property
    def scanner(self) -> SecretScanner:
        return self._scanner

    def check_text(self, content: Any, event_type: str = "text") -> HookDecision:
        """Scan content and decide.

        Args:
            content: Text (or structured value) to scan
            event_type: Event label reported in the diagnostic

        Returns:
            BLOCK with a diagnostic when secrets are found, otherwise ALLOW
        """
        self._stats["total_scans"] += 1

        scan_result = self._scanner.scan(content)
        self._stats["total_findings"] += scan_result.total_count

        if not scan_result.blocked:
            return HookDecision(HookOutcome.ALLOW, scan_result=scan_result)

        self._stats["total_blocks"] += 1
        if self._enable_logging:
            self._log_block(scan_result, event_type)

        return HookDecision(
            HookOutcome.BLOCK,
            diagnostic=self._format_block(scan_result, event_type),
            scan_result=scan_result,
        )

    def check_event(self, event) -> HookDecision:
        """Select the event's content and scan it.

        Args:
            event: A parsed hook event

        Returns:
            HookDecision
        """
        from secrets_guardian.hooks.events import content_to_scan, event_label

        label = event_label(event)
        content = content_to_scan(event)
        if content is None:
            logger.debug(f"{label} event passed through without scanning")
            return ALLOW

        logger.debug(f"Event type: {label}, content length: {len(content)}")
        return self.check_text(content, event_type=label)

    def _format_block(self, scan_result: ScanResult, event_type: str) -> dict[str, Any]:
        return {
            "error": BLOCK_TITLE,
            "event_type": event_type,
            "details": [f.describe() for f in scan_result.findings],
            "findings": [f.to_dict() for f in scan_result.findings],
            "recommendations": list(scan_result.recommendations),
            "action": BLOCK_ACTION,
        }

    def _log_block(self, scan_result: ScanResult, event_type: str) -> None:
        """Log a block without the matched text."""
        log_parts = [f"Secret interception in {event_type} event: {scan_result.summary()}"]

        for finding in scan_result.findings:
            log_parts.append(
                f"  - {finding.category} at line {finding.line_number}, offset {finding.byte_offset}"
            )

        logger.warning("\n".join(log_parts))

    def get_stats(self) -> dict[str, int]:
        """Get interception counters"""
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset interception counters"""
        self._stats = {
            "total_scans": 0,
            "total_blocks": 0,
            "total_findings": 0,
        }
