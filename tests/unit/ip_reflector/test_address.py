"""Tests for peer address parsing."""

import logging

import pytest

from ip_reflector.address import (
    UNKNOWN_PEER,
    extract_host,
    format_peer_address,
    join_host_port,
    split_host_port,
)
from ip_reflector.exceptions import AddressParseException, ErrorCode


class TestSplitHostPort:
    """Tests for split_host_port."""

    @pytest.mark.parametrize(
        "hostport, expected",
        [
            ("192.0.2.1:54321", ("192.0.2.1", "54321")),
            ("[2001:db8::1]:443", ("2001:db8::1", "443")),
            ("[::1]:9999", ("::1", "9999")),
            ("localhost:80", ("localhost", "80")),
            ("[fe80::1%eth0]:22", ("fe80::1%eth0", "22")),
            ("host:", ("host", "")),
            (":8080", ("", "8080")),
            ("[]:80", ("", "80")),
        ],
    )
    def test_valid_addresses(self, hostport, expected):
        """Test well-formed host:port strings are split."""
        assert split_host_port(hostport) == expected

    @pytest.mark.parametrize(
        "hostport, reason",
        [
            ("not-an-address", "missing port in address"),
            ("192.0.2.1", "missing port in address"),
            ("::1", "too many colons in address"),
            ("2001:db8::1:443", "too many colons in address"),
            ("[::1]", "missing port in address"),
            ("[::1]x80", "missing port in address"),
            ("[::1]:80:90", "too many colons in address"),
            ("[::1:80", "missing ']' in address"),
            ("a[b:80", "unexpected '[' in address"),
            ("a]b:80", "unexpected ']' in address"),
            ("[a]:8]0", "unexpected ']' in address"),
            ("", "missing port in address"),
        ],
    )
    def test_invalid_addresses(self, hostport, reason):
        """Test malformed strings raise with the reason."""
        with pytest.raises(AddressParseException) as exc_info:
            split_host_port(hostport)

        assert exc_info.value.address == hostport
        assert exc_info.value.reason == reason
        assert exc_info.value.code == ErrorCode.ADDRESS_PARSE_ERROR


class TestExtractHost:
    """Tests for extract_host."""

    def test_ipv4(self):
        """Test IPv4 peer returns the address without port."""
        assert extract_host("192.0.2.1:54321") == "192.0.2.1"

    def test_ipv6(self):
        """Test bracketed IPv6 peer returns the bare address."""
        assert extract_host("[2001:db8::1]:443") == "2001:db8::1"

    def test_hostname(self):
        """Test hostname peer returns the hostname."""
        assert extract_host("testclient:50000") == "testclient"

    @pytest.mark.parametrize("raw", ["not-an-address", "192.0.2.1", "::1", "[::1]", "unknown"])
    def test_unparseable_returns_input(self, raw):
        """Test unparseable input is returned unchanged."""
        assert extract_host(raw) == raw

    def test_unparseable_is_logged(self, caplog):
        """Test the fallback logs the raw address and reason."""
        with caplog.at_level(logging.WARNING, logger="ip_reflector.address"):
            extract_host("not-an-address")

        record = next(r for r in caplog.records if r.name == "ip_reflector.address")
        assert record.levelname == "WARNING"
        assert record.raw_address == "not-an-address"
        assert record.error == "missing port in address"
        assert record.event_type == "peer_address_unparsed"

    @pytest.mark.parametrize("raw", [":80", "[]:443", ":"])
    def test_empty_host_returns_input(self, raw, caplog):
        """Test an address whose host part is empty falls back to the raw string."""
        with caplog.at_level(logging.WARNING, logger="ip_reflector.address"):
            assert extract_host(raw) == raw

        record = next(r for r in caplog.records if r.name == "ip_reflector.address")
        assert record.raw_address == raw
        assert record.error == "empty host in address"

    def test_parseable_is_not_logged(self, caplog):
        """Test a normal address produces no warning."""
        with caplog.at_level(logging.WARNING, logger="ip_reflector.address"):
            extract_host("192.0.2.1:1")

        assert not [r for r in caplog.records if r.name == "ip_reflector.address"]


class TestJoinHostPort:
    """Tests for join_host_port."""

    def test_ipv4(self):
        assert join_host_port("192.0.2.1", 80) == "192.0.2.1:80"

    def test_ipv6_is_bracketed(self):
        assert join_host_port("::1", 80) == "[::1]:80"

    def test_empty_host(self):
        assert join_host_port("", 8080) == ":8080"


class TestFormatPeerAddress:
    """Tests for format_peer_address."""

    def test_ipv4_client(self):
        """Test IPv4 client tuple becomes host:port."""
        assert format_peer_address(("203.0.113.5", 40000)) == "203.0.113.5:40000"

    def test_ipv6_client(self):
        """Test IPv6 client tuple is bracketed."""
        assert format_peer_address(("::1", 9999)) == "[::1]:9999"

    def test_ipv4_mapped_client(self):
        """Test IPv4-mapped IPv6 client is reported as IPv4."""
        assert format_peer_address(("::ffff:192.0.2.7", 5000)) == "192.0.2.7:5000"

    def test_hostname_client(self):
        """Test non-IP hosts are passed through."""
        assert format_peer_address(("testclient", 50000)) == "testclient:50000"

    def test_missing_client(self):
        """Test a missing client yields the unknown placeholder."""
        assert format_peer_address(None) == UNKNOWN_PEER

    def test_round_trip_through_extract(self):
        """Test formatted peers extract back to the bare host."""
        for client in [("198.51.100.20", 1), ("2001:db8::42", 65535)]:
            assert extract_host(format_peer_address(client)) == client[0]
