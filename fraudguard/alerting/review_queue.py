"""
Review queue backends for flagged transactions.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Any, Optional

import redis
from kafka import KafkaProducer
from kafka.errors import KafkaError


@dataclass
class ReviewLogEntry:
    """Entry handed to the review team for a medium-risk transaction."""

    transaction_id: str
    risk_score: int
    reason: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_id": self.transaction_id,
            "risk_score": self.risk_score,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReviewLogEntry":
        return cls(
            transaction_id=data["transaction_id"],
            risk_score=int(data["risk_score"]),
            reason=data.get("reason") or None,
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


class ReviewQueue:
    """Destination for review log entries."""

    def queue_for_review(self, entry: ReviewLogEntry):
        raise NotImplementedError

    def close(self):
        pass


class InMemoryReviewQueue(ReviewQueue):
    """Keeps entries in a list; for hosts without a queue and for tests."""

    def __init__(self):
        self._entries: List[ReviewLogEntry] = []
        self._lock = threading.Lock()

    def queue_for_review(self, entry: ReviewLogEntry):
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> List[ReviewLogEntry]:
        with self._lock:
            return list(self._entries)


class RedisReviewQueue(ReviewQueue):
    """Stores entries as Redis hashes indexed by a pending sorted set."""

    PENDING_KEY = "reviews:pending"

    def __init__(self, redis_client: redis.Redis, entry_ttl: int = 604800):
        self.redis_client = redis_client
        self.entry_ttl = entry_ttl  # 7 days
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RedisReviewQueue":
        client = redis.Redis(
            host=config.get("redis_host", "localhost"),
            port=config.get("redis_port", 6379),
            db=config.get("redis_db", 0),
            decode_responses=True,
        )
        return cls(client, entry_ttl=config.get("entry_ttl", 604800))

    def queue_for_review(self, entry: ReviewLogEntry):
        entry_key = f"review:{entry.transaction_id}"
        mapping = entry.to_dict()
        if mapping["reason"] is None:
            # Redis hashes cannot hold None
            mapping["reason"] = ""

        pipe = self.redis_client.pipeline()
        pipe.hset(entry_key, mapping=mapping)
        pipe.expire(entry_key, self.entry_ttl)
        pipe.zadd(self.PENDING_KEY, {entry.transaction_id: entry.timestamp.timestamp()})
        pipe.expire(self.PENDING_KEY, self.entry_ttl)
        pipe.execute()

        self.logger.info(f"Queued transaction {entry.transaction_id} for review")

    def get_pending(self, limit: int = 100) -> List[ReviewLogEntry]:
        """Most recent pending entries first."""
        transaction_ids = self.redis_client.zrevrange(self.PENDING_KEY, 0, limit - 1)

        entries = []
        for transaction_id in transaction_ids:
            data = self.redis_client.hgetall(f"review:{transaction_id}")
            if data:
                entries.append(ReviewLogEntry.from_dict(data))
        return entries

    def close(self):
        self.redis_client.close()


class KafkaReviewQueue(ReviewQueue):
    """Publishes entries as JSON messages keyed by transaction ID."""

    def __init__(self, producer: KafkaProducer, topic: str = "fraud-review-queue", send_timeout: float = 10):
        self.producer = producer
        self.topic = topic
        self.send_timeout = send_timeout
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "KafkaReviewQueue":
        producer = KafkaProducer(
            bootstrap_servers=config.get("kafka_bootstrap_servers", "localhost:9092"),
            value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
            key_serializer=lambda k: k.encode("utf-8") if k else None,
            acks="all",
            **config.get("producer_config", {}),
        )
        return cls(
            producer,
            topic=config.get("kafka_topic", "fraud-review-queue"),
            send_timeout=config.get("send_timeout", 10),
        )

    def queue_for_review(self, entry: ReviewLogEntry):
        future = self.producer.send(
            topic=self.topic, key=entry.transaction_id, value=entry.to_dict()
        )
        try:
            record_metadata = future.get(timeout=self.send_timeout)
        except KafkaError as e:
            self.logger.error(
                f"Kafka error queueing transaction {entry.transaction_id} for review: {e}"
            )
            raise

        self.logger.debug(
            f"Review entry for {entry.transaction_id} sent to partition "
            f"{record_metadata.partition} at offset {record_metadata.offset}"
        )

    def close(self):
        self.producer.flush()
        self.producer.close()


def create_review_queue(config: Dict[str, Any]) -> ReviewQueue:
    """Build the review queue named by `config["backend"]`."""
    backend = config.get("backend", "memory")
    if backend == "memory":
        return InMemoryReviewQueue()
    if backend == "redis":
        return RedisReviewQueue.from_config(config)
    if backend == "kafka":
        return KafkaReviewQueue.from_config(config)
    raise ValueError(f"Unknown review queue backend: {backend}")
