"""JSONL format run logging for the CDN edge IP finder."""

import json
import os

from ..models import BatchResult, CollectionResult


class JSONLLogger:
    """Handles JSONL format logging."""
    
    def __init__(self, log_file: str):
        """Initialize JSONL logger.
        
        Args:
            log_file: Path to JSONL log file
        """
        self.log_file = log_file
    
    def _ensure_file_exists(self) -> None:
        """Ensure log file directory exists."""
        directory = os.path.dirname(self.log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
    
    def log_run(self, collection: CollectionResult, batch: BatchResult) -> None:
        """Log one collect-and-rank run in JSONL format.
        
        Failed probes are summarised by error kind instead of listed.
        
        Args:
            collection: Result of the source collection
            batch: Result of latency testing and ranking
        """
        failures = {}
        for outcome in batch.all:
            if not outcome.success:
                kind = outcome.error_kind.value
                failures[kind] = failures.get(kind, 0) + 1
        
        jsonl_entry = {
            "timestamp": collection.timestamp,
            "tested_at": batch.tested_at,
            "candidate_count": collection.count,
            "sources": [s.to_dict() for s in collection.sources],
            "tested": len(batch.all),
            "responded": batch.success_count,
            "failures": failures,
            "fast_ips": [{"ip": o.address, "delay": o.delay_ms} for o in batch.top]
        }
        
        self._ensure_file_exists()
        
        # Append to JSONL file
        with open(self.log_file, "a") as f:
            json.dump(jsonl_entry, f)
            f.write("\n")
            f.flush()  # Ensure data is written to disk
