"""IP collection from public text sources for the CDN edge IP finder."""

import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

import httpx

from ..constants import (
    BROWSER_USER_AGENT,
    CLIENT_TIMEOUT_SLACK,
    DEFAULT_IP_SOURCES,
    DEFAULT_SOURCE_TIMEOUT,
)
from ..models import Candidate, CollectionResult, SourceOutcome
from ..utils import get_current_timestamp
from .ip_extractor import find_ipv4_tokens, is_valid_ipv4


class SourceFetchError(Exception):
    """A source could not be fetched or answered with a non-success status."""


class SourceCollector:
    """Collects candidate IPs from a list of text sources."""

    def __init__(self, timeout: float = DEFAULT_SOURCE_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 show_progress: bool = True):
        """Initialize source collector.

        Args:
            timeout: Deadline in seconds for each source fetch
            transport: Optional httpx transport (used to simulate sources in tests)
            show_progress: Whether to print per-source progress messages
        """
        if timeout <= 0:
            raise ValueError(f"Source timeout must be positive, got {timeout}")
        self.timeout = timeout
        self.transport = transport
        self.show_progress = show_progress

    def _create_client(self) -> httpx.AsyncClient:
        # The client timeout is only a backstop; fetch_source enforces the real deadline
        return httpx.AsyncClient(
            timeout=self.timeout + CLIENT_TIMEOUT_SLACK,
            follow_redirects=True,
            headers={"User-Agent": BROWSER_USER_AGENT},
            transport=self.transport,
        )

    async def fetch_source(self, client: httpx.AsyncClient, source: str) -> str:
        """Fetch the raw text body of one source within the deadline.

        Args:
            client: HTTP client to use
            source: Source URL

        Returns:
            Response body as text

        Raises:
            SourceFetchError: On timeout, network failure or non-2xx status
        """
        try:
            response = await asyncio.wait_for(client.get(source), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise SourceFetchError(f"Timeout after {self.timeout:g}s") from None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SourceFetchError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise SourceFetchError(f"HTTP {response.status_code}")

        return response.text

    def process_text(self, source: str, text: str,
                     seen: Dict[str, None]) -> Tuple[Dict[str, None], SourceOutcome]:
        """Fold one source's text into the accumulated address set.

        Args:
            source: Source URL the text came from
            text: Raw text body
            seen: Addresses accumulated so far, in first-seen order

        Returns:
            Tuple of (updated address set, outcome for this source)
        """
        tokens = find_ipv4_tokens(text)
        valid = [token for token in tokens if is_valid_ipv4(token)]

        updated = dict(seen)
        for address in valid:
            updated.setdefault(address, None)

        outcome = SourceOutcome(
            source=source,
            raw_count=len(tokens),
            valid_count=len(valid),
            success=True,
        )
        return updated, outcome

    async def collect(self, sources: Sequence[str]) -> CollectionResult:
        """Collect and deduplicate candidates from every source in order.

        A failing source is recorded and skipped; it never aborts the run.

        Args:
            sources: Source URLs, visited in the given order

        Returns:
            CollectionResult with unique candidates and per-source telemetry
        """
        seen: Dict[str, None] = {}
        outcomes: List[SourceOutcome] = []

        if self.show_progress:
            print(f"[INFO] Collecting IPs from {len(sources)} sources...")

        async with self._create_client() as client:
            for source in sources:
                try:
                    text = await self.fetch_source(client, source)
                except SourceFetchError as e:
                    outcomes.append(SourceOutcome(
                        source=source,
                        success=False,
                        error_message=str(e),
                    ))
                    if self.show_progress:
                        print(f"[WARN] {source}: {e}")
                    continue

                before_count = len(seen)
                seen, outcome = self.process_text(source, text, seen)
                outcomes.append(outcome)

                if self.show_progress:
                    print(f"[INFO] {source}: {outcome.raw_count} matches, "
                          f"{outcome.valid_count} valid, +{len(seen) - before_count} new")

        result = CollectionResult(
            candidates=tuple(Candidate(address) for address in seen),
            sources=tuple(outcomes),
            timestamp=get_current_timestamp(),
        )

        if self.show_progress:
            failed = sum(1 for o in outcomes if not o.success)
            print(f"[INFO] Collection complete: {result.count} unique IPs "
                  f"({len(outcomes) - failed}/{len(outcomes)} sources succeeded)")

        return result


async def collect(sources: Optional[Sequence[str]] = None,
                  timeout: float = DEFAULT_SOURCE_TIMEOUT,
                  show_progress: bool = False) -> CollectionResult:
    """Collect unique candidate IPs from the given sources (or the built-in list)."""
    if sources is None:
        sources = DEFAULT_IP_SOURCES
    return await SourceCollector(timeout=timeout, show_progress=show_progress).collect(sources)
