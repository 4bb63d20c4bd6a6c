"""Discover, probe and rank CDN edge IPs by latency."""

from .ip_discovery import collect
from .testing import rank, probe
from .models import (
    BatchResult,
    Candidate,
    CollectionResult,
    ProbeErrorKind,
    ProbeOutcome,
    SourceOutcome,
)

__version__ = "0.1.0"

__all__ = ['collect', 'rank', 'probe', 'BatchResult', 'Candidate', 'CollectionResult',
           'ProbeErrorKind', 'ProbeOutcome', 'SourceOutcome']
