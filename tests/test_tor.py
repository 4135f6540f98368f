"""
Tests for Tor control auth and multiaddr parsing.
"""

import pytest

from collectibles.rig.tor import (
    TorAddress,
    TorConfigError,
    parse_control_auth,
    parse_multiaddr,
)


class TestControlAuth:
    def test_password(self):
        auth = parse_control_auth("password=asdf")
        assert auth.method == "password"
        assert auth.password == "asdf"

    def test_keyword_is_case_insensitive(self):
        assert parse_control_auth("Password=x").password == "x"

    def test_password_may_contain_equals(self):
        assert parse_control_auth("password=a=b").password == "a=b"

    def test_none(self):
        auth = parse_control_auth(" NONE ")
        assert auth.method == "none"
        assert auth.password is None

    def test_repr_hides_password(self):
        assert "asdf" not in repr(parse_control_auth("password=asdf"))

    @pytest.mark.parametrize("value", [None, "", "cookie", "password=", "pass=asdf"])
    def test_rejected(self, value):
        with pytest.raises(TorConfigError):
            parse_control_auth(value)


class TestMultiaddr:
    def test_dns4(self):
        addr = parse_multiaddr("/dns4/tor/tcp/9051")
        assert addr == TorAddress("dns4", "tor", 9051)
        assert addr.is_dns
        assert str(addr) == "/dns4/tor/tcp/9051"

    def test_ip4(self):
        addr = parse_multiaddr("/ip4/0.0.0.0/tcp/18188")
        assert addr.port == 18188
        assert not addr.is_dns

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "dns4/tor/tcp/9051",
            "/onion3/abc/tcp/9051",
            "/dns4/tor/udp/9051",
            "/dns4//tcp/9051",
            "/dns4/tor/tcp/port",
            "/dns4/tor/tcp/70000",
            "/dns4/tor/tcp/9051/extra",
        ],
    )
    def test_rejected(self, value):
        with pytest.raises(TorConfigError):
            parse_multiaddr(value)
