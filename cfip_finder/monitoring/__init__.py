"""Metric publishing for the CDN edge IP finder."""

from .cloudwatch_publisher import CloudWatchPublisher

__all__ = ['CloudWatchPublisher']
