"""Tests for public link normalisation."""

from __future__ import annotations

import pytest

from resume_builder.utils.links import InvalidLinkError, normalize_link, safe_href


class TestNormalizeLink:
    def test_bare_host_gets_https(self):
        assert normalize_link("github.com/ada") == "https://github.com/ada"

    def test_absolute_url_kept(self):
        assert normalize_link("http://ada.dev/notes") == "http://ada.dev/notes"

    def test_strips_whitespace(self):
        assert normalize_link("  https://ada.dev  ") == "https://ada.dev"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "ftp://files.example.com",
            "javascript://alert(1)",
            "http://localhost/admin",
            "http://127.0.0.1/",
            "http://192.168.1.1/",
            "http://[::1]/",
            "https://intranet/",
        ],
    )
    def test_rejected(self, url):
        with pytest.raises(InvalidLinkError):
            normalize_link(url)

    def test_public_ip_allowed(self):
        assert normalize_link("http://8.8.8.8/") == "http://8.8.8.8/"


class TestSafeHref:
    def test_valid(self):
        assert safe_href("linkedin.com/in/ada") == "https://linkedin.com/in/ada"

    def test_invalid_is_none(self):
        assert safe_href("javascript:alert(1)") is None
