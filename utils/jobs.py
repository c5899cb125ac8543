"""Observable state for the on-demand corpus import."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
SUCCEEDED = "succeeded"
FAILED = "failed"


class JobAlreadyRunning(RuntimeError):
    pass


class ImportJob:
    def __init__(self):
        self._lock = threading.Lock()
        self._state: Dict[str, Any] = {
            "status": IDLE,
            "started_at": None,
            "finished_at": None,
            "result": None,
            "error": None,
        }

    @property
    def status(self) -> str:
        with self._lock:
            return self._state["status"]

    def start(self) -> None:
        """Claim the job for a new run; only one run may be in progress."""
        with self._lock:
            if self._state["status"] == RUNNING:
                raise JobAlreadyRunning("Import already running")
            self._state.update(
                status=RUNNING,
                started_at=datetime.now(timezone.utc).isoformat(),
                finished_at=None,
                result=None,
                error=None,
            )
        logger.info("Import job started")

    def run(self, worker: Callable[[], Optional[Dict[str, Any]]]) -> None:
        """Execute worker and record its outcome. Call after start()."""
        try:
            result = worker()
        except Exception as exc:
            logger.exception("Import job failed")
            self._finish(FAILED, error=str(exc))
            return
        self._finish(SUCCEEDED, result=result)
        logger.info("Import job succeeded: %s", result)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._state)

    def _finish(self, status: str, *, result=None, error: Optional[str] = None) -> None:
        with self._lock:
            self._state.update(
                status=status,
                finished_at=datetime.now(timezone.utc).isoformat(),
                result=result,
                error=error,
            )
