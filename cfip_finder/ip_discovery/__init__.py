"""IP discovery from public text sources for the CDN edge IP finder."""

from .ip_extractor import extract_ipv4_addresses, find_ipv4_tokens, is_valid_ipv4
from .source_collector import SourceCollector, SourceFetchError, collect

__all__ = ['SourceCollector', 'SourceFetchError', 'collect',
           'extract_ipv4_addresses', 'find_ipv4_tokens', 'is_valid_ipv4']
