"""
Configuration loader for the fraud check pipeline.
"""

import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from ..client.scoring_client import ClientConfig
from ..processing.decision_engine import DecisionPolicy

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")

# Credentials and addresses stay strings even when they look numeric
_STRING_ENV_VARS = (
    "FRAUDGUARD_API_URL",
    "FRAUDGUARD_API_USERNAME",
    "FRAUDGUARD_API_PASSWORD",
    "REDIS_HOST",
    "KAFKA_BOOTSTRAP_SERVERS",
)


def parse_bool(value: Any, name: str) -> bool:
    """Strictly interpret a config flag; raises ValueError on anything unrecognised."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


class ConfigLoader:
    """Load and manage configuration for the fraud check pipeline."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration loader."""
        self.config_path = config_path or "config/fraudguard_config.yaml"
        self.config = {}
        self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            config_file = Path(self.config_path)
            if not config_file.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}"
                )

            with open(config_file, "r") as f:
                self.config = yaml.safe_load(f) or {}

            # Override with environment variables
            self._override_with_env()

            return self.config

        except Exception as e:
            raise RuntimeError(f"Error loading configuration: {e}") from e

    def _override_with_env(self):
        """Override configuration with environment variables."""
        env_mappings = {
            "FRAUDGUARD_API_URL": ("scoring_service", "api_base_url"),
            "FRAUDGUARD_API_USERNAME": ("scoring_service", "username"),
            "FRAUDGUARD_API_PASSWORD": ("scoring_service", "password"),
            "FRAUDGUARD_TIMEOUT_SECONDS": ("scoring_service", "timeout_seconds"),
            "FRAUDGUARD_FAIL_OPEN": ("decision", "fail_open"),
            "RISK_THRESHOLD_HIGH": ("decision", "high_threshold"),
            "RISK_THRESHOLD_MEDIUM": ("decision", "medium_threshold"),
            "REDIS_HOST": ("review_queue", "redis_host"),
            "REDIS_PORT": ("review_queue", "redis_port"),
            "KAFKA_BOOTSTRAP_SERVERS": ("review_queue", "kafka_bootstrap_servers"),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                self._set_nested_value(
                    self.config,
                    config_path,
                    env_value,
                    coerce=env_var not in _STRING_ENV_VARS,
                )

    def _set_nested_value(
        self, config: Dict[str, Any], path: tuple, value: Any, coerce: bool = True
    ):
        """Set a nested value in the configuration dictionary."""
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        # Convert value type if needed
        if coerce and isinstance(value, str):
            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            elif value.isdigit():
                value = int(value)
            elif value.replace(".", "", 1).isdigit():
                value = float(value)

        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        keys = key.split(".")
        value = self.config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_scoring_service_config(self) -> Dict[str, Any]:
        """Get scoring service configuration."""
        return self.config.get("scoring_service", {})

    def get_decision_config(self) -> Dict[str, Any]:
        """Get decision policy configuration."""
        return self.config.get("decision", {})

    def get_review_queue_config(self) -> Dict[str, Any]:
        """Get review queue configuration."""
        return self.config.get("review_queue", {})

    def get_transformer_config(self) -> Dict[str, Any]:
        """Get transaction transformer configuration."""
        return self.config.get("transformer", {})

    def get_processing_config(self) -> Dict[str, Any]:
        """Get processing configuration."""
        return self.config.get("processing", {})

    def get_client_config(self) -> ClientConfig:
        """Build the scoring client settings."""
        service = self.get_scoring_service_config()
        return ClientConfig(
            api_base_url=str(service["api_base_url"]),
            username=str(service["username"]),
            password=str(service["password"]),
            timeout_seconds=float(service.get("timeout_seconds", 5.0)),
            token_ttl_seconds=float(service.get("token_ttl_seconds", 3600)),
            verify_ssl=parse_bool(service.get("verify_ssl", True), "verify_ssl"),
        )

    def get_decision_policy(self) -> DecisionPolicy:
        """Build the decision policy."""
        decision = self.get_decision_config()
        return DecisionPolicy(
            high_threshold=int(decision.get("high_threshold", 80)),
            medium_threshold=int(decision.get("medium_threshold", 50)),
            fail_open=parse_bool(decision.get("fail_open", False), "fail_open"),
        )

    def validate_config(self) -> bool:
        """Validate the configuration."""
        required_sections = ["scoring_service", "decision"]

        for section in required_sections:
            if section not in self.config:
                raise ValueError(f"Missing required configuration section: {section}")

        for key in ("api_base_url", "username", "password"):
            if not self.get(f"scoring_service.{key}"):
                raise ValueError(f"Scoring service {key} not configured")

        # Raises ValueError on inconsistent thresholds or unparseable flags
        self.get_client_config()
        self.get_decision_policy()

        backend = self.get("review_queue.backend", "memory")
        if backend not in ("memory", "redis", "kafka"):
            raise ValueError(f"Unknown review queue backend: {backend}")

        return True


def load_config(config_path: Optional[str] = None) -> ConfigLoader:
    """Convenience function to load configuration."""
    return ConfigLoader(config_path)
