"""
Guardian hook entry point

Run with: secrets-guardian-hook
Or: python -m secrets_guardian.hooks.guardian

Claude Code writes one event as JSON to stdin. The hook exits 0 to allow
the action, 2 to block it (diagnostic on stderr), and 1 for a
non-blocking error (diagnostic on stderr, action proceeds).
"""

import json
import sys
import threading
from typing import IO, Optional

from secrets_guardian.config.settings import GuardianSettings, validate_environment
from secrets_guardian.core.secret_scanner.interceptor import (
    ALLOW,
    HookDecision,
    SecretInterceptor,
    processing_error,
    timeout_decision,
)
from secrets_guardian.core.secret_scanner.patterns import PatternRegistry, load_registry
from secrets_guardian.core.secret_scanner.scanner import SecretScanner
from secrets_guardian.hooks.events import parse_event
from secrets_guardian.hooks.runtime import HookResolution, read_payload
from secrets_guardian.logging.setup import get_logger, new_scan_id, set_scan_id, setup_logging

logger = get_logger(__name__)


def process_payload(raw: str, interceptor: SecretInterceptor) -> HookDecision:
    """Decide on one raw hook payload.

    Empty input is allowed without scanning; a payload that cannot be
    parsed yields a non-blocking error.
    """
    logger.debug(f"Total input size: {len(raw)}")
    if not raw.strip():
        logger.debug("No input received, allowing")
        return ALLOW

    try:
        event = parse_event(raw)
    except ValueError as e:
        return processing_error(e)

    return interceptor.check_event(event)


def emit_decision(decision: HookDecision, stderr: IO[str]) -> None:
    """Write the decision's diagnostic, if any, to the host's error stream."""
    if decision.diagnostic is None:
        return
    stderr.write(json.dumps(decision.diagnostic, indent=2, ensure_ascii=False) + "\n")
    stderr.flush()


def run_hook(
    stdin: IO[str],
    stderr: IO[str],
    settings: Optional[GuardianSettings] = None,
    *,
    registry: Optional[PatternRegistry] = None,
) -> int:
    """Run one hook invocation.

    Reading, registry loading and scanning happen on a worker thread; if no
    decision is reached within ``settings.timeout`` the action is allowed
    with a timeout diagnostic.

    Args:
        stdin: Stream carrying the event payload.
        stderr: Stream receiving diagnostics.
        settings: Runtime settings, defaults when None.
        registry: Pre-compiled registry; loaded from ``settings.config_path``
            when None.

    Returns:
        Process exit code.
    """
    settings = settings or GuardianSettings()
    resolution = HookResolution()
    scan_id = new_scan_id()

    def worker() -> None:
        set_scan_id(scan_id)
        try:
            scanner = SecretScanner(registry or load_registry(settings.config_path))
            decision = process_payload(read_payload(stdin), SecretInterceptor(scanner))
        except Exception as e:
            logger.warning("Unexpected error while processing hook input", exc_info=True)
            decision = processing_error(e)
        resolution.resolve(decision)

    logger.debug("Guardian hook started")
    threading.Thread(target=worker, name="guardian-scan", daemon=True).start()

    if not resolution.wait(settings.timeout):
        resolution.resolve(timeout_decision(settings.timeout))

    decision = resolution.decision
    emit_decision(decision, stderr)
    logger.debug(f"Hook resolved: {decision.outcome.name}")
    return decision.exit_code


def main() -> None:
    """Hook entry point."""
    settings = GuardianSettings.from_env()
    setup_logging(settings.log_level, settings.json_logs, settings.log_file)

    for error in validate_environment():
        logger.warning(error, extra={"event": "config_error"})

    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")

    sys.exit(run_hook(sys.stdin, sys.stderr, settings))


if __name__ == "__main__":
    main()
