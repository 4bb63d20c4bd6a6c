"""IPv4 address extraction from arbitrary scraped text."""

import re
from typing import List

# Loose lexical match; range checking happens in is_valid_ipv4
IPV4_PATTERN = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b", re.ASCII)


def is_valid_ipv4(token: str) -> bool:
    """Check that a token is a strict dotted-quad IPv4 address.
    
    Each octet must be a plain decimal number in 0-255 without leading
    zeros, so tokens like ``999.1.1.1`` or ``01.2.3.4`` are rejected rather
    than reinterpreted.
    
    Args:
        token: Candidate address string
        
    Returns:
        True if the token is a valid address
    """
    octets = token.split('.')
    if len(octets) != 4:
        return False
    
    for octet in octets:
        if not octet.isdigit() or not octet.isascii():
            return False
        if len(octet) > 1 and octet[0] == '0':
            return False
        if int(octet) > 255:
            return False
    
    return True


def find_ipv4_tokens(text: str) -> List[str]:
    """Find every substring that looks like a dotted quad, valid or not."""
    return IPV4_PATTERN.findall(text)


def extract_ipv4_addresses(text: str) -> List[str]:
    """Extract valid IPv4 addresses from text.
    
    Args:
        text: Raw text from a source
        
    Returns:
        Valid addresses in order of appearance, duplicates preserved
    """
    return [token for token in find_ipv4_tokens(text) if is_valid_ipv4(token)]
