"""Latency testing and ranking modules for the CDN edge IP finder."""

from .latency_probe import LatencyProber, probe
from .batch_ranker import BatchRanker, FixedPacing, rank, select_top

__all__ = ['LatencyProber', 'probe', 'BatchRanker', 'FixedPacing', 'rank', 'select_top']
