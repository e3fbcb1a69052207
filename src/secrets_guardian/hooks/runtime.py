"""Deadline-bounded hook execution helpers."""

import threading
from typing import IO, Optional

from secrets_guardian.core.secret_scanner.interceptor import HookDecision
from secrets_guardian.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def read_payload(stream: IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Read the hook payload until EOF.

    If the stream fails or is closed before EOF, whatever arrived so far is
    returned as the complete payload.
    """
    chunks: list[str] = []
    while True:
        try:
            chunk = stream.read(chunk_size)
        except (OSError, ValueError) as e:
            logger.debug(f"Input stream ended early: {e}")
            break
        if not chunk:
            break
        chunks.append(chunk)
        logger.debug(f"Received chunk of size {len(chunk)}")
    return "".join(chunks)


class HookResolution:
    """Holds the single decision of a hook invocation.

    The first ``resolve`` call wins; later calls are ignored, so a worker
    finishing after the deadline cannot override the timeout decision.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._decision: Optional[HookDecision] = None

    def resolve(self, decision: HookDecision) -> bool:
        """Record ``decision`` if nothing was recorded yet.

        Returns:
            True if this call resolved the invocation.
        """
        with self._lock:
            if self._decision is not None:
                return False
            self._decision = decision
        self._done.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for a decision; returns whether one was recorded."""
        return self._done.wait(timeout)

    @property
    def resolved(self) -> bool:
        return self._done.is_set()

    @property
    def decision(self) -> Optional[HookDecision]:
        return self._decision
