"""
Pytest configuration and shared fixtures.

- Paths of the rig descriptor and libwallet workflow shipped in the repo
- A writer for throwaway compose/workflow documents
- A minimal stand-in for ft.Page used by routing tests
"""

import copy
from pathlib import Path

import pytest
import yaml

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def rig_compose_path() -> Path:
    return REPO_ROOT / "buildtools" / "docker_rig" / "docker-compose.yml"


@pytest.fixture(scope="session")
def workflow_path() -> Path:
    return REPO_ROOT / ".github" / "workflows" / "libwallet.yml"


@pytest.fixture
def write_yaml(tmp_path):
    """Dump a document to a temp file and return its path as str."""
    counter = {"n": 0}

    def _write(data, name: str = "doc") -> str:
        counter["n"] += 1
        path = tmp_path / f"{name}-{counter['n']}.yml"
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return str(path)

    return _write


_RIG = {
    "version": "3.9",
    "services": {
        "tor": {"image": "tor", "ports": ["9050:9050", "9051:9051"]},
        "wallet": {
            "image": "wallet",
            "ports": ["18188:18188"],
            "environment": {
                "TARI_WALLET__WEATHERWAX__TOR_CONTROL_AUTH": "password=asdf",
                "TARI_WALLET__WEATHERWAX__TOR_CONTROL_ADDRESS": "/dns4/tor/tcp/9051",
                "TARI_WALLET__WEATHERWAX__TOR_SOCKS_ADDRESS_OVERRIDE": "/dns4/tor/tcp/9050",
                "TARI_WALLET__WEATHERWAX__TCP_LISTENER_ADDRESS": "/ip4/0.0.0.0/tcp/18188",
            },
            "depends_on": ["tor"],
        },
        "base_node": {
            "image": "base_node",
            "ports": ["18189:18189"],
            "environment": {
                "TARI_BASE_NODE__WEATHERWAX__TOR_CONTROL_AUTH": "password=asdf",
                "TARI_BASE_NODE__WEATHERWAX__TOR_CONTROL_ADDRESS": "/dns4/tor/tcp/9051",
                "TARI_BASE_NODE__WEATHERWAX__TOR_SOCKS_ADDRESS_OVERRIDE": "/dns4/tor/tcp/9050",
                "TARI_BASE_NODE__WEATHERWAX__TCP_LISTENER_ADDRESS": "/ip4/0.0.0.0/tcp/18189",
            },
            "depends_on": ["tor"],
        },
    },
}


@pytest.fixture
def rig_doc() -> dict:
    """A fresh, valid rig document that tests may mutate."""
    return copy.deepcopy(_RIG)


class FakePage:
    def __init__(self, route: str = "/"):
        self.route = route
        self.visited: list[str] = []

    def go(self, route: str) -> None:
        self.visited.append(route)
        self.route = route


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()
