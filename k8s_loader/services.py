"""
services.py
Turns `kubectl get pods` text into a map of logical services.

Pods follow the naming convention

    <env>-<namespace>-<service>-<id1>-<id2>

e.g. `dev-team-alpha-checkout-ab12-xy34` in namespace `team-alpha` is the
`checkout` service, environment `dev`, id `ab12-xy34`.

Only this module knows about the tabular text format, so it can be swapped
for a structured (-o json) query without touching the prompts.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

ENVIRONMENTS = ("dev", "qa", "stg")


@dataclass(frozen=True)
class PodRef:
    id:        str
    namespace: str


ServiceMap = Dict[str, Dict[str, PodRef]]


def _environment_of(pod_name: str) -> Optional[str]:
    for env in ENVIRONMENTS:
        if pod_name.startswith(f"{env}-"):
            return env
    return None


def _strip_namespace(name: str, namespace: str) -> str:
    # Anchored: a namespace appearing later in the name is part of the service.
    if not namespace:
        return name
    return re.sub(rf"^{re.escape(namespace)}-", "", name)


def parse_services(text: str, namespace: Optional[str] = None) -> ServiceMap:
    """
    Build {service: {env: PodRef}} from `kubectl get pods` output.

    `namespace` is the value passed to `--namespace`; that listing has no
    NAMESPACE column, so every row belongs to it. Later rows overwrite earlier
    ones for the same service and environment.
    """
    services: ServiceMap = {}
    lines = text.strip().splitlines()
    if not lines:
        return services

    headers = lines[0].split()
    if "NAME" not in headers:
        return services
    name_idx = headers.index("NAME")
    ns_idx   = headers.index("NAMESPACE") if "NAMESPACE" in headers else None

    for line in lines[1:]:
        columns = line.split()
        if len(columns) <= name_idx:
            continue

        pod_ns = namespace
        if not pod_ns and ns_idx is not None and len(columns) > ns_idx:
            pod_ns = columns[ns_idx]

        pod_name = columns[name_idx]
        env = _environment_of(pod_name)
        if env is None:
            continue

        remainder = _strip_namespace(pod_name[len(env) + 1:], pod_ns)
        parts = remainder.split("-")
        if len(parts) <= 2:
            continue

        service = "-".join(parts[:-2])
        services.setdefault(service, {})[env] = PodRef(
            id="-".join(parts[-2:]),
            namespace=pod_ns or "",
        )

    return services


def sorted_services(services: ServiceMap) -> List[str]:
    return sorted(services)
