"""
prompts.py
The question/answer steps: service → environment → local port → remote port.

Every invalid answer raises; there is no retry loop. The user re-runs
the command instead.
"""
from dataclasses import dataclass
from typing import List

from k8s_loader.errors import (
    InvalidSelectionError,
    MissingEnvironmentError,
    NoServicesError,
)
from k8s_loader.services import ENVIRONMENTS, PodRef, ServiceMap, sorted_services
from k8s_loader.session import Session

DEFAULT_ENVIRONMENT = "1"
DEFAULT_LOCAL_PORT  = "3000"
DEFAULT_REMOTE_PORT = "3000"


@dataclass
class Selection:
    service:     str
    environment: str
    pod:         PodRef
    namespace:   str
    local_port:  str = DEFAULT_LOCAL_PORT
    remote_port: str = DEFAULT_REMOTE_PORT

    @property
    def service_name(self) -> str:
        """Name of the Kubernetes Service object in front of the pod."""
        return f"{self.environment}-{self.namespace}-{self.service}"

    @property
    def pod_name(self) -> str:
        return f"{self.service_name}-{self.pod.id}"

    @property
    def url(self) -> str:
        return f"http://localhost:{self.local_port}"


def _parse_port(answer: str) -> str:
    try:
        port = int(answer)
    except ValueError:
        port = 0
    if not 1 <= port <= 65535:
        raise InvalidSelectionError(
            f"Invalid port '{answer}'. Please run the script again and enter a number between 1 and 65535."
        )
    return str(port)


def choose_service(session: Session, services: ServiceMap) -> str:
    names = sorted_services(services)
    if not names:
        raise NoServicesError()

    session.heading("\nServices found:")
    for i, name in enumerate(names, start=1):
        session.success(f"[{i}] {name}")

    answer = session.ask("Select a service by typing a number: ")
    try:
        index = int(answer)
    except ValueError:
        index = 0
    if not 1 <= index <= len(names):
        raise InvalidSelectionError(
            "Invalid selection. Please run the script again and choose a valid number."
        )

    selected = names[index - 1]
    session.info(f"You selected: {selected}")
    return selected


def choose_environment(session: Session) -> str:
    session.heading("\nEnvironments:")
    for i, env in enumerate(ENVIRONMENTS, start=1):
        session.success(f"[{i}] {env}")

    answer = session.ask(
        f"Select an environment by typing a number (default: {DEFAULT_ENVIRONMENT}): ",
        default=DEFAULT_ENVIRONMENT,
    )
    choices = {str(i): env for i, env in enumerate(ENVIRONMENTS, start=1)}
    if answer not in choices:
        options = ", ".join(f"'{c}'" for c in choices)
        raise InvalidSelectionError(
            f"Invalid selection. Please run the script again and choose one of {options}."
        )
    return choices[answer]


def resolve_pod(services: ServiceMap, service: str, environment: str) -> PodRef:
    pod = services.get(service, {}).get(environment)
    if pod is None:
        raise MissingEnvironmentError(service, environment)
    return pod


def ask_local_port(session: Session) -> str:
    answer = session.ask(
        f"\nEnter the local port to run the service (default: {DEFAULT_LOCAL_PORT}): ",
        default=DEFAULT_LOCAL_PORT,
    )
    return _parse_port(answer)


def ask_remote_port(session: Session, detected: List[str]) -> str:
    """Offer the first port the service declares, falling back to 3000."""
    default = detected[0] if detected else DEFAULT_REMOTE_PORT
    session.info(f"Port detected: {' '.join(detected) or 'none'}\n")
    answer = session.ask(
        "Enter the destination port on the Kubernetes service. "
        f"Try using port {DEFAULT_REMOTE_PORT} if the detected port fails (default: {default}): ",
        default=default,
    )
    return _parse_port(answer)


def ask_follow_logs(session: Session) -> bool:
    return session.confirm("\nWould you like to see the logs in real time? (Y/n): ", default=True)
