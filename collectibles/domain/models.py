"""
models.py - Domain models
Single responsibility: typed containers for the dashboard, the docker rig
and the libwallet workflow.
"""
import re
from dataclasses import dataclass, field
from typing import Optional

from collectibles.config import UPLOAD_ARTIFACT_ACTION


@dataclass(frozen=True)
class AccountDashboardState:
    """Placeholder state of the account dashboard.

    Nothing writes these fields and the render never reads them; they are
    kept for wiring an account-balance source later.
    """

    error: Optional[Exception] = None
    is_saving: bool = False
    asset_public_key: str = ""
    tip101: bool = False
    tip102: bool = False


# ---------------------------------------------------------------------------
# docker rig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PortMapping:
    host: int | None  # None: docker picks an ephemeral host port
    container: int
    protocol: str = "tcp"
    host_ip: str | None = None


@dataclass
class ServiceSpec:
    name: str
    image: str | None = None
    ports: list[PortMapping] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)
    depends_on: list[str] = field(default_factory=list)
    volumes: list[str] = field(default_factory=list)
    build_context: str | None = None
    dockerfile: str | None = None
    stdin_open: bool = False
    tty: bool = False

    def container_ports(self) -> set[int]:
        return {p.container for p in self.ports}

    def env_suffix(self, suffix: str) -> Optional[str]:
        """Value of the first variable named ``*__<suffix>``, if any."""
        for key, value in self.environment.items():
            if key.endswith(f"__{suffix}"):
                return value
        return None


@dataclass
class Composition:
    version: str | None
    services: dict[str, ServiceSpec] = field(default_factory=dict)

    def service(self, name: str) -> ServiceSpec:
        try:
            return self.services[name]
        except KeyError:
            raise KeyError(f"Unknown service: {name}") from None

    def host_ports(self) -> list[tuple[str, PortMapping]]:
        return [
            (s.name, p)
            for s in self.services.values()
            for p in s.ports
            if p.host is not None
        ]


# ---------------------------------------------------------------------------
# libwallet workflow
# ---------------------------------------------------------------------------


@dataclass
class WorkflowStep:
    name: str | None = None
    uses: str | None = None
    run: str | None = None
    continue_on_error: bool = False
    with_args: dict = field(default_factory=dict)
    env: dict = field(default_factory=dict)

    @property
    def label(self) -> str:
        if self.name or self.uses:
            return self.name or self.uses
        lines = (self.run or "").strip().splitlines()
        return lines[0] if lines else "<unnamed step>"


@dataclass
class WorkflowJob:
    name: str
    runs_on: str
    steps: list[WorkflowStep] = field(default_factory=list)

    def uploads(self) -> list[WorkflowStep]:
        return [
            s for s in self.steps if s.uses and s.uses.startswith(UPLOAD_ARTIFACT_ACTION)
        ]

    def tolerant_steps(self) -> list[WorkflowStep]:
        return [s for s in self.steps if s.continue_on_error]


@dataclass
class Workflow:
    name: str
    branch_patterns: list[str] = field(default_factory=list)
    tag_patterns: list[str] = field(default_factory=list)
    jobs: dict[str, WorkflowJob] = field(default_factory=dict)

    def triggers_on(self, ref_name: str, tag: bool = False) -> bool:
        patterns = self.tag_patterns if tag else self.branch_patterns
        return matches_ref_filters(ref_name, patterns)


def ref_filter_regex(pattern: str) -> re.Pattern:
    """Compile a GitHub Actions branch/tag filter.

    ``*`` stops at ``/``, ``**`` does not; ``?`` and ``+`` repeat the
    preceding character; ``[...]`` is a character class.
    """
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if ch == "*":
            out.append("[^/]*")
        elif ch in "?+" and out and out[-1][-1] not in "*?+":
            out.append(ch)
        elif ch == "[" and "]" in pattern[i + 1:]:
            end = pattern.index("]", i + 1)
            out.append(pattern[i:end + 1])
            i = end + 1
            continue
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out))


def matches_ref_filters(ref_name: str, patterns: list[str]) -> bool:
    """Later patterns win; a leading ``!`` excludes what it matches."""
    selected = False
    for pattern in patterns:
        negated = pattern.startswith("!")
        body = pattern[1:] if negated else pattern
        if ref_filter_regex(body).fullmatch(ref_name):
            selected = not negated
    return selected
