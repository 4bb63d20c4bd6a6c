"""Text format run logging for the CDN edge IP finder."""

import os

from ..models import BatchResult, CollectionResult


class TextLogger:
    """Handles text format logging."""
    
    def __init__(self, log_file: str):
        """Initialize text logger.
        
        Args:
            log_file: Path to text log file
        """
        self.log_file = log_file
    
    def _ensure_file_exists(self) -> None:
        """Ensure log file directory exists."""
        directory = os.path.dirname(self.log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
    
    def log_run(self, collection: CollectionResult, batch: BatchResult) -> None:
        """Log a readable report of one collect-and-rank run.
        
        Args:
            collection: Result of the source collection
            batch: Result of latency testing and ranking
        """
        self._ensure_file_exists()
        
        with open(self.log_file, "a") as f:
            f.write(f"[{collection.timestamp}] Collected {collection.count} unique IPs\n\n")
            
            f.write("Sources:\n")
            for outcome in collection.sources:
                if outcome.success:
                    f.write(f"  OK    {outcome.source}  matches={outcome.raw_count}  "
                            f"valid={outcome.valid_count}\n")
                else:
                    f.write(f"  FAIL  {outcome.source}  error={outcome.error_message}\n")
            
            f.write(f"\n[{batch.tested_at}] Tested {len(batch.all)} IPs, "
                    f"{batch.success_count} responded\n")
            
            f.write("\nFastest IPs:\n")
            if not batch.top:
                f.write("  (none)\n")
            for rank, outcome in enumerate(batch.top, 1):
                f.write(f"  {rank:>3}. {outcome.address:<15}  {outcome.delay_ms:9.2f} ms\n")
            
            # Add separator between runs
            f.write("\n" + "="*80 + "\n\n")
