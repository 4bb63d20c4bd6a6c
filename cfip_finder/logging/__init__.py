"""Run report logging for the CDN edge IP finder."""

from .jsonl_logger import JSONLLogger
from .text_logger import TextLogger

__all__ = ['JSONLLogger', 'TextLogger']
