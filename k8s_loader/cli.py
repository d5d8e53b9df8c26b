"""
cli.py — k8s-loader entry point.

Can be invoked two ways:
  1. k8s-loader [--namespace <NAMESPACE>]
  2. python -m k8s_loader [--namespace <NAMESPACE>]

Lists pods, asks which service and environment to use, then port-forwards
to the matching pod and optionally follows its logs.
"""
from typing import Optional

import click
from rich.console import Console

from k8s_loader import __repository__, __version__
from k8s_loader.errors import LoaderError
from k8s_loader.session import Session

console = Console()


def _banner(session: Session):
    session.console.print("[yellow]☸️  K8s Service Loader[/yellow]")
    session.info(__repository__)
    session.info(f"Version: {__version__}")
    session.info("Usage:")
    session.info("  k8s-loader")
    session.info("  k8s-loader --namespace <NAMESPACE>")


def load(session: Session, namespace: Optional[str] = None):
    """The whole interactive flow, start to finish."""
    from k8s_loader import kubectl, port_forward, prompts
    from k8s_loader.services import parse_services

    session.command(kubectl.format_command(kubectl.pods_command(namespace)))
    session.spinner.start("Loading services")
    pods = kubectl.get_pods(namespace)
    session.spinner.stop()

    services = parse_services(pods, namespace)
    service  = prompts.choose_service(session, services)
    env      = prompts.choose_environment(session)
    pod      = prompts.resolve_pod(services, service, env)

    selection = prompts.Selection(
        service=service,
        environment=env,
        pod=pod,
        namespace=namespace or pod.namespace,
    )
    selection.local_port = prompts.ask_local_port(session)

    cmd = kubectl.service_port_command(selection.namespace, selection.service_name)
    session.command(kubectl.format_command(cmd))
    session.spinner.start("Detecting port on the Kubernetes service")
    detected = kubectl.detect_service_ports(selection.namespace, selection.service_name)
    session.spinner.stop()
    selection.remote_port = prompts.ask_remote_port(session, detected)

    port_forward.run(session, selection)


@click.command()
@click.version_option(version=__version__, prog_name="k8s-loader")
@click.option("--namespace", default=None, metavar="NAMESPACE",
              help="Only list pods in this namespace (default: all namespaces).")
def main(namespace):
    """
    Port-forward to a Kubernetes service picked from a menu.

    \b
    Pods are expected to be named
        <dev|qa|stg>-<namespace>-<service>-<id>-<id>
    """
    namespace = namespace or None
    session = Session(console=console)
    _banner(session)
    try:
        load(session, namespace)
    except LoaderError as e:
        session.close()
        session.error(str(e))
    except (KeyboardInterrupt, click.Abort):
        session.close()
        session.info("\nStopped.")
    else:
        session.close()
