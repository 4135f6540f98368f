"""
compose.py - docker rig descriptor
Single responsibility: load the docker-compose file of the local rig and
check that the tor / wallet / base node wiring is consistent.
"""
import logging
import os

import yaml

from collectibles.config import RIG_COMPOSE_PATH, RIG_REQUIRED_DEPENDENCIES
from collectibles.domain.models import Composition, PortMapping, ServiceSpec
from collectibles.rig.tor import TorConfigError, parse_control_auth, parse_multiaddr

logger = logging.getLogger(__name__)


class DescriptorError(ValueError):
    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []


# ---------------------------------------------------------------------------
# 読み込み
# ---------------------------------------------------------------------------


def _port_range(text, entry) -> list[int]:
    """"9050" -> [9050]; "9050-9052" -> [9050, 9051, 9052]."""
    first, sep, last = str(text).strip().partition("-")
    try:
        start = int(first)
        end = int(last) if sep else start
    except ValueError:
        raise DescriptorError(f"Invalid port entry: {entry!r}") from None
    if not 0 < start <= end < 65536:
        raise DescriptorError(f"Port out of range in {entry!r}")
    return list(range(start, end + 1))


def _pair_ports(hosts, containers, protocol, host_ip, entry) -> list[PortMapping]:
    if hosts is None:
        return [PortMapping(None, c, protocol, host_ip) for c in containers]
    if len(hosts) != len(containers):
        raise DescriptorError(
            f"Host and container port ranges differ in length: {entry!r}"
        )
    return [PortMapping(h, c, protocol, host_ip) for h, c in zip(hosts, containers)]


def parse_ports(entry) -> list[PortMapping]:
    """Short ("[ip:]host:container[/proto]") or long (mapping) port syntax.

    Port ranges expand to one mapping per port.
    """
    if isinstance(entry, dict):
        if "target" not in entry:
            raise DescriptorError(f"Invalid port entry: {entry!r}")
        published = entry.get("published")
        return _pair_ports(
            _port_range(published, entry) if published is not None else None,
            _port_range(entry["target"], entry),
            str(entry.get("protocol", "tcp")),
            entry.get("host_ip"),
            entry,
        )

    text = str(entry).strip()
    spec, _, protocol = text.partition("/")
    parts = spec.rsplit(":", 2)
    if len(parts) == 1:
        return _pair_ports(None, _port_range(parts[0], entry), protocol or "tcp", None, entry)
    host_ip = parts[0] if len(parts) == 3 else None
    return _pair_ports(
        _port_range(parts[-2], entry),
        _port_range(parts[-1], entry),
        protocol or "tcp",
        host_ip,
        entry,
    )


def parse_port(entry) -> PortMapping:
    """A single mapping; ranges are rejected."""
    ports = parse_ports(entry)
    if len(ports) != 1:
        raise DescriptorError(f"Expected a single port, got a range: {entry!r}")
    return ports[0]


def _parse_environment(raw) -> dict[str, str]:
    if raw is None:
        return {}
    if isinstance(raw, list):
        env = {}
        for item in raw:
            key, _, value = str(item).partition("=")
            env[key] = value
        return env
    if isinstance(raw, dict):
        return {str(k): "" if v is None else str(v) for k, v in raw.items()}
    raise DescriptorError(f"environment must be a mapping or list, got {type(raw).__name__}")


def _parse_depends_on(raw) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [str(k) for k in raw]
    if isinstance(raw, list):
        return [str(v) for v in raw]
    raise DescriptorError(f"depends_on must be a list or mapping, got {type(raw).__name__}")


def _parse_service(name: str, raw) -> ServiceSpec:
    if not isinstance(raw, dict):
        raise DescriptorError(f"Service {name!r} must be a mapping")
    build = raw.get("build")
    if isinstance(build, dict):
        build_context, dockerfile = build.get("context"), build.get("dockerfile")
    else:
        build_context, dockerfile = build, None
    return ServiceSpec(
        name=name,
        image=raw.get("image"),
        ports=[m for p in raw.get("ports") or [] for m in parse_ports(p)],
        environment=_parse_environment(raw.get("environment")),
        depends_on=_parse_depends_on(raw.get("depends_on")),
        volumes=[str(v) for v in raw.get("volumes") or []],
        build_context=build_context,
        dockerfile=dockerfile,
        stdin_open=bool(raw.get("stdin_open", False)),
        tty=bool(raw.get("tty", False)),
    )


def parse_composition(data) -> Composition:
    if not isinstance(data, dict):
        raise DescriptorError("Compose document must be a mapping")
    services = data.get("services")
    if not isinstance(services, dict):
        raise DescriptorError("Compose document has no services mapping")
    version = data.get("version")
    return Composition(
        version=str(version) if version is not None else None,
        services={str(n): _parse_service(str(n), s) for n, s in services.items()},
    )


def load_composition(path: str = RIG_COMPOSE_PATH) -> Composition:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Compose file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DescriptorError(f"Malformed compose file {path}: {exc}") from exc
    comp = parse_composition(data)
    logger.info("Loaded %d services from %s", len(comp.services), path)
    return comp


# ---------------------------------------------------------------------------
# 検証
# ---------------------------------------------------------------------------


_WILDCARD_HOST_IPS = {None, "", "0.0.0.0", "::"}


def _bind_ip(port: PortMapping) -> str | None:
    ip = port.host_ip
    if ip is None:
        return None
    return ip.strip().strip("[]")


def _binds_overlap(a: str | None, b: str | None) -> bool:
    # a wildcard bind takes the port on every interface
    return a in _WILDCARD_HOST_IPS or b in _WILDCARD_HOST_IPS or a == b


def _check_unique_host_ports(comp: Composition) -> list[str]:
    problems = []
    seen: dict[tuple, list[tuple[str | None, str]]] = {}
    for name, port in comp.host_ports():
        key = (port.host, port.protocol)
        ip = _bind_ip(port)
        clash = next(
            (owner for other_ip, owner in seen.get(key, []) if _binds_overlap(ip, other_ip)),
            None,
        )
        if clash is not None:
            problems.append(
                f"Host port {port.host}/{port.protocol} is published by both "
                f"{clash!r} and {name!r}"
            )
        seen.setdefault(key, []).append((ip, name))
    return problems


def _check_dependencies(comp: Composition, required) -> list[str]:
    problems = []
    for svc in comp.services.values():
        for dep in svc.depends_on:
            if dep not in comp.services:
                problems.append(f"{svc.name!r} depends on undeclared service {dep!r}")
    for name, deps in required.items():
        if name not in comp.services:
            problems.append(f"Required service {name!r} is missing")
            continue
        for dep in deps:
            if dep not in comp.services[name].depends_on:
                problems.append(f"{name!r} must depend on {dep!r}")
    return problems


def _check_upstream_address(comp: Composition, svc: ServiceSpec, key: str) -> list[str]:
    value = svc.env_suffix(key)
    if value is None:
        return []
    try:
        addr = parse_multiaddr(value)
    except TorConfigError as exc:
        return [f"{svc.name!r} {key}: {exc}"]
    if not addr.is_dns:
        return []
    if addr.host not in svc.depends_on:
        return [f"{svc.name!r} {key} points at {addr.host!r} which it does not depend on"]
    upstream = comp.services.get(addr.host)
    if upstream is not None and addr.port not in upstream.container_ports():
        return [f"{svc.name!r} {key} uses port {addr.port} not exposed by {addr.host!r}"]
    return []


def _check_node_wiring(comp: Composition) -> list[str]:
    problems = []
    for svc in comp.services.values():
        if svc.env_suffix("TOR_CONTROL_ADDRESS") is None:
            continue
        problems += _check_upstream_address(comp, svc, "TOR_CONTROL_ADDRESS")
        problems += _check_upstream_address(comp, svc, "TOR_SOCKS_ADDRESS_OVERRIDE")

        listener = svc.env_suffix("TCP_LISTENER_ADDRESS")
        if listener is not None:
            try:
                addr = parse_multiaddr(listener)
            except TorConfigError as exc:
                problems.append(f"{svc.name!r} TCP_LISTENER_ADDRESS: {exc}")
            else:
                if svc.ports and addr.port not in svc.container_ports():
                    problems.append(
                        f"{svc.name!r} listens on {addr.port} but does not publish it"
                    )

        try:
            parse_control_auth(svc.env_suffix("TOR_CONTROL_AUTH"))
        except TorConfigError as exc:
            problems.append(f"{svc.name!r} TOR_CONTROL_AUTH: {exc}")
    return problems


def validate_composition(comp: Composition, required=None) -> list[str]:
    """Return a list of wiring problems; empty when the rig is consistent."""
    if required is None:
        required = RIG_REQUIRED_DEPENDENCIES
    return (
        _check_unique_host_ports(comp)
        + _check_dependencies(comp, required)
        + _check_node_wiring(comp)
    )


def ensure_valid(comp: Composition, required=None) -> Composition:
    problems = validate_composition(comp, required)
    if problems:
        raise DescriptorError(
            f"{len(problems)} problem(s) in compose descriptor", problems
        )
    return comp


def dependency_order(comp: Composition) -> list[str]:
    """Services in start order; declaration order breaks ties."""
    names = list(comp.services)
    pending = {
        n: [d for d in comp.services[n].depends_on if d in comp.services] for n in names
    }
    ordered: list[str] = []
    while pending:
        ready = [n for n in names if n in pending and all(d in ordered for d in pending[n])]
        if not ready:
            raise DescriptorError(
                f"Dependency cycle between services: {', '.join(sorted(pending))}"
            )
        for n in ready:
            ordered.append(n)
            del pending[n]
    return ordered
