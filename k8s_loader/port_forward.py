"""
port_forward.py
Runs `kubectl port-forward` for the selected pod and, once the tunnel is up,
offers to follow the pod's logs with `kubectl logs -f`.

Both commands run in the foreground of this terminal: their output is
streamed line by line until they exit or the user presses Ctrl+C.
"""
import subprocess
import threading
import time
from typing import Callable, List, Optional

import click

from k8s_loader.kubectl import format_command, logs_command, port_forward_command
from k8s_loader.prompts import Selection, ask_follow_logs
from k8s_loader.session import Session

LOGS_PROMPT_DELAY = 0.5  # seconds between the tunnel coming up and the logs prompt
TERMINATE_TIMEOUT = 2    # seconds to let children exit after Ctrl+C


def _spawn(cmd: list) -> subprocess.Popen:
    return subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        bufsize=1,
    )


def _pump(stream, handle: Callable[[str], None]):
    for line in iter(stream.readline, ""):
        handle(line.rstrip("\n"))
    stream.close()


class StreamedProcess:
    """A child process whose stdout/stderr are echoed from reader threads."""

    label = "Process"
    spinner_message = "Starting"

    def __init__(self, session: Session, cmd: List[str]):
        self.session = session
        self.cmd     = cmd
        self.proc: Optional[subprocess.Popen] = None
        self.exited  = threading.Event()
        self._threads: List[threading.Thread] = []

    def start(self):
        self.session.command(format_command(self.cmd))
        self.session.spinner.start(self.spinner_message)
        self.proc = _spawn(self.cmd)
        readers = [
            threading.Thread(target=_pump, args=(self.proc.stdout, self.on_stdout), daemon=True),
            threading.Thread(target=_pump, args=(self.proc.stderr, self.on_stderr), daemon=True),
        ]
        for t in readers:
            t.start()
        watcher = threading.Thread(target=self._watch, args=(readers,), daemon=True)
        watcher.start()
        self._threads = readers + [watcher]

    def _watch(self, readers: List[threading.Thread]):
        code = self.proc.wait()
        for t in readers:
            t.join()
        # Still spinning means no output ever arrived.
        self.stop_spinner(result="stopped")
        self.session.info(f"\n{self.label} process exited with code {code}")
        self.exited.set()

    def stop_spinner(self, result: str = "done"):
        """Stop the spinner this process started; leave any other one alone."""
        self.session.spinner.stop(result=result, only=self.spinner_message)

    def on_stdout(self, line: str):
        self.session.plain(line)

    def on_stderr(self, line: str):
        self.session.error(line)

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        self.exited.wait(timeout)
        return self.proc.returncode

    def terminate(self):
        if self.proc is not None and self.proc.poll() is None:
            self.proc.terminate()


class PortForward(StreamedProcess):
    label = "Port-forward"
    spinner_message = "Initializing port forwarding"

    def __init__(self, session: Session, selection: Selection):
        super().__init__(
            session,
            port_forward_command(
                selection.namespace,
                selection.pod_name,
                selection.local_port,
                selection.remote_port,
            ),
        )
        self.selection = selection
        # Fires once, on the first line kubectl prints ("Forwarding from ...").
        self.ready = threading.Event()

    def on_stdout(self, line: str):
        if not self.ready.is_set():
            self.stop_spinner()
        self.session.success(f"\n{line}")
        self.session.heading(f"Service available at: {self.selection.url}")
        self.ready.set()

    def wait_ready(self) -> bool:
        """Block until the tunnel reports in. False if kubectl exited first."""
        while not self.ready.wait(0.1):
            if self.exited.is_set():
                return self.ready.is_set()
        return True


class LogFollower(StreamedProcess):
    label = "Logs"
    spinner_message = "Fetching logs for the pod"

    def __init__(self, session: Session, selection: Selection):
        super().__init__(session, logs_command(selection.namespace, selection.pod_name))
        self._first = True

    def on_stdout(self, line: str):
        if self._first:
            self.stop_spinner()
            self._first = False
        self.session.plain(line)


def follow_logs(session: Session, selection: Selection) -> Optional[LogFollower]:
    """Ask whether to tail logs; start the follower if the answer is yes."""
    if not ask_follow_logs(session):
        session.info("Skipping logs.")
        return None
    follower = LogFollower(session, selection)
    follower.start()
    return follower


def run(session: Session, selection: Selection, delay: float = LOGS_PROMPT_DELAY):
    """Forward the port, offer logs once it is up, then wait for both to end."""
    forward = PortForward(session, selection)
    follower = None
    forward.start()
    try:
        if forward.wait_ready():
            time.sleep(delay)
            follower = follow_logs(session, selection)
        forward.wait()
        if follower is not None:
            follower.wait()
    except (KeyboardInterrupt, click.Abort):
        children = [c for c in (forward, follower) if c is not None]
        for child in children:
            child.terminate()
        for child in children:
            child.wait(timeout=TERMINATE_TIMEOUT)
        raise
