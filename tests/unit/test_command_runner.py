"""
Unit tests for running external commands.
"""
import os
import shlex
import signal
import subprocess
import threading

import pytest
from beefdock.RUNNERS.command_runner import CommandRunner


class InterruptedProcess:
    """Popen stand-in whose first wait is cut short by Ctrl-C."""

    def __init__(self, *args, **kwargs):
        self.waits = 0
        self.killed = False

    def wait(self):
        self.waits += 1
        if self.waits == 1:
            raise KeyboardInterrupt
        return 130

    def kill(self):
        self.killed = True

    terminate = kill


def test_streamed_command_result(tmp_path):
    result = CommandRunner().run(["sh", "-c", "exit 3"], cwd=str(tmp_path))
    assert result.returncode == 3
    assert result.stdout == ""


def test_interrupt_waits_for_streamed_child(monkeypatch):
    processes = []

    def popen(*args, **kwargs):
        processes.append(InterruptedProcess(*args, **kwargs))
        return processes[-1]

    monkeypatch.setattr(subprocess, "Popen", popen)
    with pytest.raises(KeyboardInterrupt):
        CommandRunner().run(["docker", "build", "."])
    assert processes[0].waits == 2
    assert processes[0].killed is False


@pytest.mark.skipif(os.name != "posix", reason="needs POSIX signals")
def test_interrupted_child_finishes_its_own_shutdown(tmp_path):
    marker = tmp_path / "marker"
    script = f"trap '' INT; sleep 1; touch {shlex.quote(str(marker))}"
    timer = threading.Timer(0.3, os.kill, args=(os.getpid(), signal.SIGINT))
    timer.start()
    try:
        with pytest.raises(KeyboardInterrupt):
            CommandRunner().run(["sh", "-c", script])
    finally:
        timer.cancel()
    assert marker.exists()
