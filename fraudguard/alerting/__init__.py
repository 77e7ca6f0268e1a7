"""
Review queue components for the fraud check pipeline.
"""

from .review_queue import (
    ReviewLogEntry,
    ReviewQueue,
    InMemoryReviewQueue,
    RedisReviewQueue,
    KafkaReviewQueue,
    create_review_queue,
)
from .review_notifier import ReviewNotifier

__all__ = [
    "ReviewLogEntry",
    "ReviewQueue",
    "InMemoryReviewQueue",
    "RedisReviewQueue",
    "KafkaReviewQueue",
    "create_review_queue",
    "ReviewNotifier",
]
