"""
tor.py - Tor proxy settings
Single responsibility: parse the Tor control auth and the multiaddr strings
the rig hands to the wallet and base node.
"""
from dataclasses import dataclass

_ADDRESS_KINDS = ("dns4", "dns6", "ip4", "ip6")


class TorConfigError(ValueError):
    pass


@dataclass(frozen=True)
class TorControlAuth:
    method: str  # "none" | "password"
    password: str | None = None

    def __repr__(self) -> str:
        if self.password is None:
            return f"TorControlAuth(method={self.method!r})"
        return f"TorControlAuth(method={self.method!r}, password='****')"


@dataclass(frozen=True)
class TorAddress:
    kind: str
    host: str
    port: int

    @property
    def is_dns(self) -> bool:
        return self.kind.startswith("dns")

    def __str__(self) -> str:
        return f"/{self.kind}/{self.host}/tcp/{self.port}"


def parse_control_auth(text: str | None) -> TorControlAuth:
    """Accepts ``none`` or ``password=<secret>`` (keyword is case-insensitive)."""
    if text is None:
        raise TorConfigError("Tor control auth is not set")
    value = str(text).strip()
    if value.lower() == "none":
        return TorControlAuth("none")
    keyword, sep, secret = value.partition("=")
    if not sep or keyword.strip().lower() != "password":
        raise TorConfigError(f"Unsupported Tor control auth: {value!r}")
    if not secret:
        raise TorConfigError("Tor control password is empty")
    return TorControlAuth("password", secret)


def parse_multiaddr(text: str | None) -> TorAddress:
    """Parse ``/dns4/tor/tcp/9051`` style addresses (TCP only)."""
    if not text:
        raise TorConfigError("Address is empty")
    parts = str(text).strip().split("/")
    # leading "/" yields an empty first element
    if len(parts) != 5 or parts[0] != "":
        raise TorConfigError(f"Malformed multiaddr: {text!r}")
    _, kind, host, proto, port = parts
    if kind not in _ADDRESS_KINDS:
        raise TorConfigError(f"Unsupported address kind {kind!r} in {text!r}")
    if proto != "tcp":
        raise TorConfigError(f"Only tcp is supported, got {proto!r} in {text!r}")
    if not host:
        raise TorConfigError(f"Missing host in {text!r}")
    try:
        port_num = int(port)
    except ValueError:
        raise TorConfigError(f"Invalid port {port!r} in {text!r}") from None
    if not 0 < port_num < 65536:
        raise TorConfigError(f"Port out of range in {text!r}")
    return TorAddress(kind, host, port_num)
