"""Configuration management for the CDN edge IP finder."""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from .constants import (
    DEFAULT_BATCH_INTERVAL,
    DEFAULT_CLOUDWATCH_NAMESPACE,
    DEFAULT_CONCURRENCY,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REPORT_DIR,
    DEFAULT_SOURCE_TIMEOUT,
    DEFAULT_TOP_N,
)

DEFAULTS = {
    'source_timeout_seconds': DEFAULT_SOURCE_TIMEOUT,
    'probe_timeout_seconds': DEFAULT_PROBE_TIMEOUT,
    'concurrency': DEFAULT_CONCURRENCY,
    'batch_interval_seconds': DEFAULT_BATCH_INTERVAL,
    'top_n': DEFAULT_TOP_N,
    'report_dir': DEFAULT_REPORT_DIR,
    'cloudwatch': None,
}


def _is_integer(value: Any) -> bool:
    """True for ints, excluding bools (which are ints in Python)."""
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_integer(value) or isinstance(value, float)


class Config:
    """Centralized configuration management with validation."""

    def __init__(self, config_path: str = "config.json"):
        """Load and validate configuration from JSON file.

        Args:
            config_path: Path to configuration file
        """
        self._load_and_validate(config_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a configuration from an in-memory mapping.

        Raises:
            ValueError: If required fields are missing or values are invalid
        """
        config = cls.__new__(cls)
        config._data = cls._validate(data)
        return config

    def _load_and_validate(self, config_path: str) -> None:
        """Load configuration and validate required fields."""
        try:
            with open(config_path, 'r') as f:
                raw = json.load(f)
            self._data = self._validate(raw)

        except FileNotFoundError:
            print(f"[ERROR] Configuration file '{config_path}' not found")
            print("   Make sure the file exists or pass --config")
            sys.exit(1)
        except json.JSONDecodeError as e:
            print(f"[ERROR] Invalid JSON in configuration file: {e}")
            sys.exit(1)
        except ValueError as e:
            print(f"[ERROR] Error loading config: {e}")
            sys.exit(1)

    @staticmethod
    def _validate(raw: Any) -> Dict[str, Any]:
        """Apply defaults and check every field."""
        if not isinstance(raw, dict):
            raise ValueError("Configuration must be a JSON object")

        required_fields = ['ip_sources']
        missing_fields = [field for field in required_fields if field not in raw]
        if missing_fields:
            raise ValueError(f"Missing required configuration fields: {missing_fields}")

        data = dict(DEFAULTS)
        data.update(raw)

        sources = data['ip_sources']
        if not isinstance(sources, list) or not sources or not all(isinstance(s, str) for s in sources):
            raise ValueError("'ip_sources' must be a non-empty list of URLs")

        for field in ('source_timeout_seconds', 'probe_timeout_seconds'):
            if not _is_number(data[field]) or data[field] <= 0:
                raise ValueError(f"'{field}' must be a positive number")

        if not _is_integer(data['concurrency']) or data['concurrency'] < 1:
            raise ValueError("'concurrency' must be an integer of at least 1")

        if not _is_number(data['batch_interval_seconds']) or data['batch_interval_seconds'] < 0:
            raise ValueError("'batch_interval_seconds' cannot be negative")

        if not _is_integer(data['top_n']) or data['top_n'] < 0:
            raise ValueError("'top_n' must be a non-negative integer")

        # Expand user paths
        data['report_dir'] = os.path.expanduser(data['report_dir'])

        cloudwatch = data['cloudwatch']
        if cloudwatch is not None:
            if not isinstance(cloudwatch, dict) or 'region' not in cloudwatch:
                raise ValueError("'cloudwatch' must be an object with a 'region'")
            data['cloudwatch'] = {
                'region': cloudwatch['region'],
                'namespace': cloudwatch.get('namespace', DEFAULT_CLOUDWATCH_NAMESPACE),
            }

        return data

    @property
    def ip_sources(self) -> List[str]:
        """Source URLs to collect IPs from, in visiting order."""
        return list(self._data['ip_sources'])

    @property
    def source_timeout_seconds(self) -> float:
        """Deadline for each source fetch in seconds."""
        return self._data['source_timeout_seconds']

    @property
    def probe_timeout_seconds(self) -> float:
        """Deadline for each latency probe in seconds."""
        return self._data['probe_timeout_seconds']

    @property
    def concurrency(self) -> int:
        """Number of probes in flight per group."""
        return self._data['concurrency']

    @property
    def batch_interval_seconds(self) -> float:
        """Pause between probe groups in seconds."""
        return self._data['batch_interval_seconds']

    @property
    def top_n(self) -> int:
        """Maximum number of ranked IPs to keep."""
        return self._data['top_n']

    @property
    def report_dir(self) -> str:
        """Directory for run report files."""
        return self._data['report_dir']

    @property
    def cloudwatch_region(self) -> Optional[str]:
        """AWS region for metric publishing, or None if disabled."""
        cloudwatch = self._data['cloudwatch']
        return cloudwatch['region'] if cloudwatch else None

    @property
    def cloudwatch_namespace(self) -> str:
        """CloudWatch namespace for published metrics."""
        cloudwatch = self._data['cloudwatch']
        return cloudwatch['namespace'] if cloudwatch else DEFAULT_CLOUDWATCH_NAMESPACE
