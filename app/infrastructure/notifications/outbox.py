"""Outbound queue between notification creation and dispatch.

The creation path publishes persisted notifications here; a single worker
thread consumes them and hands each to the dispatcher. The worker is
started once by the application lifespan.

Usage:
    outbox = NotificationOutbox(dispatcher)
    outbox.start()

    outbox.publish(notification)   # returns immediately

    outbox.stop()                  # drain pending items and join the worker
"""

import queue
import threading
from typing import TYPE_CHECKING, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import Notification

if TYPE_CHECKING:
    from infrastructure.notifications.dispatcher import NotificationDispatcher

logger = get_module_logger()

_STOP = object()


class NotificationOutbox:
    """Single-consumer in-process queue feeding the dispatcher.

    Dispatch exceptions are logged and never stop the worker. Items still
    queued at process exit are lost; the notification record itself is
    already persisted.
    """

    def __init__(self, dispatcher: "NotificationDispatcher"):
        self._dispatcher = dispatcher
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def pending(self) -> int:
        return self._queue.qsize()

    def publish(self, notification: Notification) -> None:
        """Enqueue a persisted notification for dispatch."""
        if self._stopped:
            logger.error("outbox_publish_after_stop", notification_id=notification.id)
            return
        self._queue.put(notification)
        logger.debug("outbox_published", notification_id=notification.id)

    def start(self) -> None:
        """Start the worker thread. Calling it again is a no-op."""
        with self._lock:
            if self.is_running:
                logger.warning("outbox_already_started")
                return
            self._stopped = False
            self._worker = threading.Thread(
                target=self._run, name="notification-outbox", daemon=True
            )
            self._worker.start()
        logger.info("outbox_started")

    def drain(self) -> int:
        """Process everything currently queued.

        Runs on the caller's thread when the worker is not running (tests,
        shutdown); otherwise blocks until the worker has caught up.

        Returns:
            Number of notifications processed on the caller's thread.
        """
        if self.is_running:
            self._queue.join()
            return 0

        processed = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return processed
            try:
                if item is not _STOP:
                    self._process(item)
                    processed += 1
            finally:
                self._queue.task_done()

    def stop(self, timeout: Optional[float] = 10.0) -> None:
        """Stop accepting work, let the worker finish the queue and join it."""
        with self._lock:
            self._stopped = True
            worker = self._worker
            self._worker = None

        if worker is not None and worker.is_alive():
            self._queue.put(_STOP)
            worker.join(timeout=timeout)
            if worker.is_alive():
                logger.warning("outbox_worker_join_timeout", pending=self.pending())
                return

        leftover = self.drain()
        logger.info("outbox_stopped", drained_on_stop=leftover)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._process(item)
            finally:
                self._queue.task_done()

    def _process(self, notification: Notification) -> None:
        try:
            self._dispatcher.dispatch(notification)
        except Exception as e:
            logger.exception(
                "outbox_dispatch_failed",
                notification_id=notification.id,
                error=str(e),
            )
