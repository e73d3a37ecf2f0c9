"""Unit tests for navigation guardrails."""

import pytest

from webdriver_wire.utils.guardrails import extract_domain, validate_domain


class TestExtractDomain:
    """Tests for domain extraction."""

    @pytest.mark.parametrize(
        "url, domain",
        [
            ("https://Example.COM/path", "example.com"),
            ("http://example.com:8080/", "example.com"),
            ("https://user:pw@sub.example.com", "sub.example.com"),
            ("about:blank", None),
            ("not a url", None),
        ],
    )
    def test_extract(self, url, domain):
        """Should return the lower-cased host or None."""
        assert extract_domain(url) == domain


class TestValidateDomain:
    """Tests for the allow-list check."""

    def test_empty_list_allows_all(self):
        """Should allow any URL when no list is configured."""
        assert validate_domain("https://anything.test", [])
        assert validate_domain("about:blank", [])

    def test_exact_match(self):
        assert validate_domain("https://example.com/x", ["example.com"])

    def test_subdomain_match(self):
        """Should allow subdomains of an allowed domain."""
        assert validate_domain("https://a.b.example.com", ["example.com"])

    def test_suffix_is_not_subdomain(self):
        """Should not treat a shared suffix as a subdomain."""
        assert not validate_domain("https://badexample.com", ["example.com"])

    def test_case_insensitive(self):
        assert validate_domain("https://EXAMPLE.com", [" Example.Com "])

    def test_hostless_url_rejected(self):
        """Should reject URLs without a host when a list is set."""
        assert not validate_domain("about:blank", ["example.com"])

    def test_blank_entries_ignored(self):
        assert not validate_domain("https://evil.test", ["", "  "])
