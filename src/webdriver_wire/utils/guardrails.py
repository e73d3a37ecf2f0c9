"""Domain allow-list checks applied before navigation."""

from urllib.parse import urlparse
from typing import Optional


def extract_domain(url: str) -> Optional[str]:
    """
    Extract the lower-cased host from a URL.

    Args:
        url: URL to parse

    Returns:
        Domain string or None if the URL has no host
    """
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def validate_domain(url: str, allowed_domains: list[str]) -> bool:
    """
    Check if a URL's domain is in the allowed list.

    Args:
        url: URL to validate
        allowed_domains: List of allowed domain patterns

    Returns:
        True if domain is allowed, False otherwise

    Notes:
        - If allowed_domains is empty, all domains are allowed
        - Supports exact match and subdomain matching
        - Domain matching is case-insensitive
    """
    if not allowed_domains:
        return True

    domain = extract_domain(url)
    if domain is None:
        return False

    for allowed in allowed_domains:
        allowed = allowed.lower().strip()
        if not allowed:
            continue

        # Exact match
        if domain == allowed:
            return True

        # Subdomain match (e.g., "example.com" allows "sub.example.com")
        if domain.endswith(f".{allowed}"):
            return True

    return False
