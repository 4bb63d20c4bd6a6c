"""Shared utilities for the CDN edge IP finder."""

import os
import datetime
from typing import List, Sequence, Tuple, TypeVar

from .constants import UTC_PLUS_8

T = TypeVar("T")


def get_current_timestamp() -> str:
    """Get current timestamp in UTC+8 timezone."""
    return datetime.datetime.now(UTC_PLUS_8).isoformat(timespec="seconds")


def get_run_timestamp() -> str:
    """Get run timestamp in YYYYMMDDHHMMSS format using UTC+8 timezone."""
    return datetime.datetime.now(UTC_PLUS_8).strftime("%Y%m%d%H%M%S")


def get_log_file_paths(report_dir: str, run_timestamp: str) -> Tuple[str, str]:
    """Generate report file paths for current run.
    
    Args:
        report_dir: Directory for report files
        run_timestamp: UTC+8 timestamp string in YYYYMMDDHHMMSS format
        
    Returns:
        Tuple of (jsonl_file, text_file)
    """
    base_name = f"fast_ips_{run_timestamp}"
    
    jsonl_file = os.path.join(report_dir, f"{base_name}.jsonl")
    text_file = os.path.join(report_dir, f"{base_name}.txt")
    
    return jsonl_file, text_file


def ensure_directory_exists(directory: str) -> None:
    """Ensure directory exists, create if necessary."""
    os.makedirs(directory, exist_ok=True)


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive groups of at most size elements, keeping order."""
    if size < 1:
        raise ValueError(f"Group size must be at least 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]
