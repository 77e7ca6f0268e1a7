"""
Review notifier for medium-risk transactions.
"""

import logging
import threading
from concurrent.futures import Executor, Future
from datetime import datetime, timezone
from typing import Callable, Optional

from ..models.fraud_score import ScoreResult
from ..models.transaction import TransactionRequest
from .review_queue import ReviewLogEntry, ReviewQueue


class ReviewNotifier:
    """Hand flagged transactions to the review queue without ever raising.

    Queue failures are logged and counted so the host can observe them, but
    they never reach the caller and never change the transaction outcome.
    When an executor is given, the queue call runs on it and `notify`
    returns immediately.
    """

    def __init__(
        self,
        review_queue: ReviewQueue,
        executor: Optional[Executor] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.review_queue = review_queue
        self.executor = executor
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self.counters = {"entries_queued": 0, "queue_failures": 0}

    def notify(self, request: TransactionRequest, score: ScoreResult):
        try:
            entry = ReviewLogEntry(
                transaction_id=request.transaction_id,
                risk_score=score.risk_score,
                reason=score.reason,
                timestamp=self.clock(),
            )
            if self.executor is None:
                self._dispatch(entry)
            else:
                future = self.executor.submit(self._dispatch, entry)
                future.add_done_callback(self._on_dispatch_done)
        except Exception as e:
            self._record_failure(request.transaction_id, e)

    def _dispatch(self, entry: ReviewLogEntry):
        try:
            self.review_queue.queue_for_review(entry)
        except Exception as e:
            self._record_failure(entry.transaction_id, e)
            return

        with self._lock:
            self.counters["entries_queued"] += 1

    def _on_dispatch_done(self, future: Future):
        error = future.exception()
        if error is not None:
            self.logger.error(f"Review dispatch crashed: {error}")

    def _record_failure(self, transaction_id: str, error: Exception):
        with self._lock:
            self.counters["queue_failures"] += 1
        self.logger.error(
            f"Failed to queue transaction {transaction_id} for review: {error}"
        )
