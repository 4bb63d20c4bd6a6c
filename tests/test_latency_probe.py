"""
Tests for LatencyProber.

Focus on outcome classification and deadline enforcement.
"""

import asyncio
import ssl

import httpx
import pytest

from cfip_finder.constants import BROWSER_USER_AGENT
from cfip_finder.models import ProbeErrorKind
from cfip_finder.testing import LatencyProber
from cfip_finder.testing.latency_probe import build_ip_ssl_context


def prober_for(handler, timeout=5.0):
    return LatencyProber(timeout=timeout, transport=httpx.MockTransport(handler))


class TestLatencyProber:
    """Test LatencyProber behavior through public interface."""

    def test_successful_probe_reports_delay(self):
        """A response within the deadline should yield a delay."""
        # Arrange
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="fl=123\nip=1.2.3.4\n")

        # Act
        outcome = asyncio.run(prober_for(handler).probe("104.16.1.1"))

        # Assert
        assert outcome.success
        assert outcome.address == "104.16.1.1"
        assert outcome.delay_ms is not None and outcome.delay_ms >= 0
        assert outcome.error_kind is None
        assert str(seen[0].url) == "https://104.16.1.1/cdn-cgi/trace"
        assert seen[0].method == "GET"
        assert seen[0].headers["User-Agent"] == BROWSER_USER_AGENT

    def test_any_status_counts_as_response(self):
        outcome = asyncio.run(prober_for(lambda request: httpx.Response(403)).probe("1.1.1.1"))

        assert outcome.success

    def test_unresponsive_edge_times_out(self):
        """A probe that never answers should be cancelled at the deadline."""
        # Arrange
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200)

        prober = prober_for(handler)

        # Act
        outcome = asyncio.run(prober.probe("1.1.1.1", timeout=0.05))

        # Assert
        assert not outcome.success
        assert outcome.delay_ms is None
        assert outcome.error_kind is ProbeErrorKind.TIMEOUT

    def test_connection_failure_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("No route to host")

        outcome = asyncio.run(prober_for(handler).probe("10.255.255.1"))

        assert not outcome.success
        assert outcome.error_kind is ProbeErrorKind.NETWORK_ERROR
        assert outcome.error_message == "No route to host"

    def test_tls_failure_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")

        outcome = asyncio.run(prober_for(handler).probe("1.1.1.1"))

        assert outcome.error_kind is ProbeErrorKind.NETWORK_ERROR

    def test_client_timeout_is_classified_as_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out")

        outcome = asyncio.run(prober_for(handler).probe("1.1.1.1"))

        assert outcome.error_kind is ProbeErrorKind.TIMEOUT

    def test_timeout_does_not_affect_sibling_probes(self):
        """Cancelling one probe should leave concurrent probes untouched."""
        # Arrange
        async def handler(request):
            if request.url.host == "2.2.2.2":
                await asyncio.sleep(10)
            return httpx.Response(200)

        prober = prober_for(handler, timeout=0.2)

        async def probe_both():
            return await asyncio.gather(prober.probe("1.1.1.1"), prober.probe("2.2.2.2"))

        # Act
        fast, slow = asyncio.run(probe_both())

        # Assert
        assert fast.success
        assert slow.error_kind is ProbeErrorKind.TIMEOUT

    def test_outer_cancellation_propagates(self):
        """Cancelling the caller is not reported as a probe timeout."""
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200)

        prober = prober_for(handler)

        async def cancel_probe():
            task = asyncio.ensure_future(prober.probe("1.1.1.1"))
            await asyncio.sleep(0.05)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(cancel_probe())

    def test_non_positive_timeout_is_rejected(self):
        with pytest.raises(ValueError):
            LatencyProber(timeout=0)

        prober = prober_for(lambda request: httpx.Response(200))
        with pytest.raises(ValueError):
            asyncio.run(prober.probe("1.1.1.1", timeout=-1))


class TestIPSSLContext:
    """Test TLS settings used for bare-IP connections."""

    def test_skips_hostname_but_verifies_chain(self):
        context = build_ip_ssl_context()

        assert context.check_hostname is False
        assert context.verify_mode == ssl.CERT_REQUIRED
