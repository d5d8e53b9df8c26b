"""Shared fixtures: a scripted session and a fake kubectl process."""
import io
import subprocess
import threading

import pytest
from rich.console import Console

from k8s_loader.session import Session

PODS_ALL = """\
NAMESPACE    NAME                                   READY   STATUS    RESTARTS   AGE
team-alpha   dev-team-alpha-checkout-ab12-xy34      1/1     Running   0          2d
team-alpha   qa-team-alpha-checkout-cd56-zw78       1/1     Running   0          2d
team-alpha   dev-team-alpha-cart-api-ef90-gh12      1/1     Running   0          5h
kube-system  coredns-5d78c9869d-abcde               1/1     Running   0          30d
team-beta    stg-team-beta-billing-ij34-kl56        1/1     Running   1          1d
"""

PODS_ONE_NAMESPACE = """\
NAME                                   READY   STATUS    RESTARTS   AGE
dev-team-alpha-checkout-ab12-xy34      1/1     Running   0          2d
dev-team-alpha-cart-api-ef90-gh12      1/1     Running   0          5h
"""


def scripted(*answers):
    """A `read` callable that returns each answer in turn, then hits EOF."""
    queue = list(answers)

    def read():
        if not queue:
            raise EOFError
        return queue.pop(0)

    return read


def make_session(*answers) -> Session:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    return Session(console=console, read=scripted(*answers))


def output_of(session: Session) -> str:
    return session.console.file.getvalue()


class FakePopen:
    """
    Stands in for subprocess.Popen with canned stdout/stderr lines.
    With hang=True, wait() blocks until terminate() is called.
    """

    def __init__(self, cmd, stdout=(), stderr=(), returncode=0, hang=False):
        self.cmd = cmd
        self.stdout = io.StringIO("".join(f"{line}\n" for line in stdout))
        self.stderr = io.StringIO("".join(f"{line}\n" for line in stderr))
        self.returncode = None
        self.terminated = False
        self._code = returncode
        self._killed = threading.Event()
        if not hang:
            self._killed.set()

    def wait(self):
        self._killed.wait()
        self.returncode = self._code
        return self._code

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self._code = -15
        self._killed.set()


@pytest.fixture
def spawned(monkeypatch):
    """
    Replace process spawning in port_forward.py.

    Set `spawned.outputs["port-forward"]` / `["logs"]` to a dict of FakePopen
    kwargs; every spawned FakePopen is appended to `spawned.procs`.
    """
    class Spawned:
        outputs = {
            "port-forward": {"stdout": ["Forwarding from 127.0.0.1:3000 -> 8080"]},
            "logs": {"stdout": ["listening on :8080"]},
        }
        procs = []

        def __call__(self, cmd):
            proc = FakePopen(cmd, **self.outputs.get(cmd[1], {}))
            self.procs.append(proc)
            return proc

        @property
        def commands(self):
            return [p.cmd for p in self.procs]

    fake = Spawned()
    fake.outputs = dict(Spawned.outputs)
    fake.procs = []
    monkeypatch.setattr("k8s_loader.port_forward._spawn", fake)
    return fake


@pytest.fixture
def kubectl_results(monkeypatch):
    """
    Replace kubectl queries. Fill `.results` with a kubectl resource
    ("pods", "service") → (stdout, stderr, returncode); `.calls` records
    every command run.
    """
    class Results:
        results = {}
        calls = []

        def __call__(self, cmd):
            self.calls.append(cmd)
            stdout, stderr, code = self.results[cmd[2]]
            return subprocess.CompletedProcess(cmd, code, stdout=stdout, stderr=stderr)

    fake = Results()
    fake.results = {}
    fake.calls = []
    monkeypatch.setattr("k8s_loader.kubectl._run", fake)
    return fake
