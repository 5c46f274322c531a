"""Background scan task reporting a single terminal outcome."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable

from duview.core.scanner import ScanCancelled, ScanError, scan
from duview.models.tree import DirectoryNode
from duview.utils import format_elapsed

log = logging.getLogger(__name__)

SPINNER_FRAMES = "|/-\\"

Scanner = Callable[..., DirectoryNode]


def spinner_frame(index: int) -> str:
    """Return the spinner character for tick *index*."""
    return SPINNER_FRAMES[index % len(SPINNER_FRAMES)]


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Terminal event of a scan: either a tree or an error."""

    tree: DirectoryNode | None = None
    error: ScanError | None = None
    elapsed: float = 0.0


class ScanTask:
    """Runs one scan on a worker thread.

    The worker puts exactly one ``ScanOutcome`` on a single-slot queue.
    ``on_done`` (if given) is called once from the worker thread, so a
    frontend must marshal it onto its own event loop.
    """

    def __init__(
        self,
        path: str,
        recency_minutes: int = 0,
        scanner: Scanner = scan,
        on_done: Callable[[ScanOutcome], None] | None = None,
    ) -> None:
        self.path = path
        self.recency_minutes = recency_minutes
        self._scanner = scanner
        self._on_done = on_done
        self._cancel = threading.Event()
        self._outcomes: queue.Queue[ScanOutcome] = queue.Queue(maxsize=1)
        self._outcome: ScanOutcome | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Scan task already started")
        self._thread = threading.Thread(target=self._run, name="duview-scan", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        """Ask the worker to stop; it reports a ``ScanCancelled`` outcome."""
        self._cancel.set()

    def wait(self, timeout: float | None = None) -> ScanOutcome | None:
        """Block until the outcome is available, or *timeout* expires."""
        if self._outcome is None:
            try:
                self._outcome = self._outcomes.get(timeout=timeout)
            except queue.Empty:
                return None
        return self._outcome

    def _run(self) -> None:
        started = time.monotonic()
        try:
            tree = self._scanner(self.path, self.recency_minutes, cancel=self._cancel)
            outcome = ScanOutcome(tree=tree, elapsed=time.monotonic() - started)
            log.info(
                "Scanned %s: %d bytes in %s",
                self.path,
                tree.size,
                format_elapsed(outcome.elapsed),
            )
        except ScanCancelled as e:
            log.info("Scan of %s cancelled", self.path)
            outcome = ScanOutcome(error=e, elapsed=time.monotonic() - started)
        except ScanError as e:
            log.warning("Scan of %s failed: %s", self.path, e)
            outcome = ScanOutcome(error=e, elapsed=time.monotonic() - started)
        except Exception as e:
            log.exception("Unexpected failure scanning %s", self.path)
            outcome = ScanOutcome(error=ScanError(str(e)), elapsed=time.monotonic() - started)

        self._outcomes.put(outcome)
        if self._on_done is not None:
            self._on_done(outcome)
