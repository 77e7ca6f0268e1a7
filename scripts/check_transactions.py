#!/usr/bin/env python3
"""
Run host transactions from a JSON file through the fraud check.
"""

import sys
import json
import argparse
import logging
from dataclasses import replace

from fraudguard.alerting.review_queue import create_review_queue
from fraudguard.config.config_loader import load_config
from fraudguard.models.transaction import TransactionRequest
from fraudguard.processing.transaction_processor import FraudCheckProcessor


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def load_transactions(path: str):
    """Read one transaction object or a list of them."""
    with open(path, "r") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    return [TransactionRequest.from_dict(item) for item in data]


def main():
    """Main fraud check script."""
    parser = argparse.ArgumentParser(description="Run transactions through the fraud check")
    parser.add_argument("transactions", help="JSON file with one transaction or a list")
    parser.add_argument(
        "--config", default="config/fraudguard_config.yaml", help="Path to YAML config"
    )
    parser.add_argument(
        "--fail-open",
        action="store_true",
        help="Approve transactions when the scoring service is unavailable",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
        config.validate_config()

        policy = config.get_decision_policy()
        if args.fail_open:
            policy = replace(policy, fail_open=True)

        review_queue = create_review_queue(config.get_review_queue_config())
        transformer_config = config.get_transformer_config()
        processing_config = config.get_processing_config()
        processor = FraudCheckProcessor.from_config(
            config.get_client_config(),
            policy,
            review_queue,
            country_prefix=transformer_config.get("country_prefix", "NG"),
            max_workers=int(processing_config.get("max_workers", 4)),
        )

        transactions = load_transactions(args.transactions)
        try:
            outcomes = processor.evaluate_batch(transactions)
        finally:
            processor.close()
            review_queue.close()

        for request, outcome in zip(transactions, outcomes):
            print(
                json.dumps(
                    {
                        "transaction_id": request.transaction_id,
                        "outcome": outcome.to_dict() if outcome else None,
                    }
                )
            )

        logger.info(f"Fraud check metrics: {processor.get_metrics()}")
        return 0 if all(o is not None and o.is_approved for o in outcomes) else 2

    except KeyboardInterrupt:
        logger.info("Fraud check interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Error running fraud check: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
