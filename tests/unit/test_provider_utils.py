"""
tests/unit/test_provider_utils.py

Unit tests for providers/utils.py.
"""

from __future__ import annotations

from providers.utils import build_domain_name, redact_url, to_single_line, to_string
from publicip.ipversion import IpVersion


def test_build_domain_name_root_marker_is_bare_domain():
    assert build_domain_name("@", "example.com") == "example.com"
    assert build_domain_name("", "example.com") == "example.com"


def test_build_domain_name_prefixes_subdomain():
    assert build_domain_name("sub", "example.com") == "sub.example.com"
    assert build_domain_name("*", "example.com") == "*.example.com"


def test_to_single_line_collapses_whitespace():
    assert to_single_line("  a\n\tb\r\nc  ") == "a b c"


def test_to_single_line_truncates_long_bodies():
    line = to_single_line("x" * 500, max_length=20)
    assert line == "x" * 20 + "..."


def test_to_string_lists_record_fields():
    text = to_string("example.com", "@", "dynu", IpVersion.IP4)
    assert text == "[domain: example.com | host: @ | provider: dynu | ip: ipv4]"


def test_redact_url_drops_credentials():
    assert redact_url("https://api.dynu.com/nic/update?password=p") == "https://api.dynu.com/nic/update"
