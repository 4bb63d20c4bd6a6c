"""Main orchestration logic for the CDN edge IP finder."""

from typing import Optional, Tuple

from .config import Config
from .ip_discovery import SourceCollector
from .logging import JSONLLogger, TextLogger
from .models import BatchResult, CollectionResult
from .monitoring import CloudWatchPublisher
from .testing import BatchRanker, FixedPacing, LatencyProber
from .utils import ensure_directory_exists, get_log_file_paths, get_run_timestamp


class Pipeline:
    """Runs collection, latency testing, ranking and reporting once."""

    def __init__(self, config: Config,
                 collector: Optional[SourceCollector] = None,
                 ranker: Optional[BatchRanker] = None,
                 publisher: Optional[CloudWatchPublisher] = None,
                 concurrency: Optional[int] = None,
                 write_reports: bool = True,
                 show_progress: bool = True):
        """Initialize pipeline with all required components.

        Args:
            config: Configuration object
            collector: Override for the source collector
            ranker: Override for the batch ranker
            publisher: Metric publisher, or None to skip publishing
            concurrency: Override for the configured probe group size
            write_reports: Whether to append JSONL and text run reports
            show_progress: Whether to print progress messages
        """
        self.config = config
        self.show_progress = show_progress
        self.collector = collector or SourceCollector(
            timeout=config.source_timeout_seconds,
            show_progress=show_progress,
        )
        self.ranker = ranker or BatchRanker(
            prober=LatencyProber(timeout=config.probe_timeout_seconds),
            concurrency=config.concurrency if concurrency is None else concurrency,
            pacing=FixedPacing(config.batch_interval_seconds),
            show_progress=show_progress,
        )
        self.publisher = publisher

        self.jsonl_logger = None
        self.text_logger = None
        if write_reports:
            ensure_directory_exists(config.report_dir)
            jsonl_file, text_file = get_log_file_paths(config.report_dir, get_run_timestamp())
            self.jsonl_logger = JSONLLogger(jsonl_file)
            self.text_logger = TextLogger(text_file)

    async def run(self, limit: Optional[int] = None) -> Tuple[CollectionResult, BatchResult]:
        """Run one full pass.

        Args:
            limit: Override for the ranked list size (defaults to config top_n)

        Returns:
            Tuple of (collection_result, batch_result)
        """
        limit = self.config.top_n if limit is None else limit

        collection = await self.collector.collect(self.config.ip_sources)
        if collection.count == 0 and self.show_progress:
            print("[WARN] No candidate IPs collected from any source")

        batch = await self.ranker.rank(collection.candidates, limit)

        if self.jsonl_logger:
            self.jsonl_logger.log_run(collection, batch)
        if self.text_logger:
            self.text_logger.log_run(collection, batch)
            if self.show_progress:
                print(f"[INFO] Report written to {self.text_logger.log_file}")

        if self.publisher:
            self.publisher.publish(batch)

        if self.show_progress:
            self.print_summary(batch)

        return collection, batch

    @staticmethod
    def print_summary(batch: BatchResult) -> None:
        """Print the ranked list."""
        print(f"\n[INFO] Fastest {len(batch.top)} IPs (tested at {batch.tested_at}):")
        for rank, outcome in enumerate(batch.top, 1):
            print(f"  {rank:>3}. {outcome.address:<15} {outcome.delay_ms:9.2f} ms")


async def run_pipeline(config: Config, limit: Optional[int] = None,
                       concurrency: Optional[int] = None,
                       write_reports: bool = True,
                       publish_metrics: bool = False,
                       show_progress: bool = True) -> Tuple[CollectionResult, BatchResult]:
    """Build a pipeline from configuration and run it once."""
    publisher = None
    if publish_metrics:
        if config.cloudwatch_region is None:
            raise ValueError("Metric publishing needs a 'cloudwatch' section in the configuration")
        publisher = CloudWatchPublisher(config.cloudwatch_region, config.cloudwatch_namespace)

    pipeline = Pipeline(config, publisher=publisher, concurrency=concurrency,
                        write_reports=write_reports, show_progress=show_progress)
    return await pipeline.run(limit)
