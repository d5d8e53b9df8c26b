"""
kubectl.py
Thin wrappers around the kubectl binary.

Short queries (pod listing, service port lookup) are run to completion and
their stdout returned. The long-running port-forward and logs commands are
only built here; port_forward.py spawns them.
"""
import subprocess
from typing import List, Optional

from k8s_loader.errors import KubectlError

KUBECTL = "kubectl"


def _run(cmd: list) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, check=False)


def run_kubectl(cmd: list) -> str:
    """
    Run a kubectl query and return its stdout.
    Any stderr output is treated as a failure, same as a non-zero exit.
    """
    try:
        result = _run(cmd)
    except FileNotFoundError:
        raise KubectlError(cmd, f"{cmd[0]} command not found")

    if result.returncode != 0:
        raise KubectlError(cmd, result.stderr or f"exit code {result.returncode}")
    if result.stderr:
        raise KubectlError(cmd, result.stderr)
    return result.stdout


def format_command(cmd: list) -> str:
    return " ".join(cmd)


# ── Command builders ──────────────────────────────────────────────────────────

def pods_command(namespace: Optional[str] = None) -> List[str]:
    if namespace:
        return [KUBECTL, "get", "pods", "--namespace", namespace]
    return [KUBECTL, "get", "pods", "--all-namespaces"]


def service_port_command(namespace: str, service: str) -> List[str]:
    return [
        KUBECTL, "get", "service",
        "--namespace", namespace,
        service,
        "-o", "jsonpath={.spec.ports[*].port}",
    ]


def port_forward_command(namespace: str, pod: str, local_port, remote_port) -> List[str]:
    return [
        KUBECTL, "port-forward",
        "--namespace", namespace,
        pod,
        f"{local_port}:{remote_port}",
    ]


def logs_command(namespace: str, pod: str) -> List[str]:
    return [KUBECTL, "logs", "--namespace", namespace, pod, "-f"]


# ── Queries ───────────────────────────────────────────────────────────────────

def get_pods(namespace: Optional[str] = None) -> str:
    """Raw `kubectl get pods` table for one namespace or all of them."""
    return run_kubectl(pods_command(namespace))


def detect_service_ports(namespace: str, service: str) -> List[str]:
    """Ports declared on a Kubernetes service, in declaration order."""
    return run_kubectl(service_port_command(namespace, service)).split()
