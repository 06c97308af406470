"""
Shared fixtures: a fake command runner standing in for docker, curl and jq.
"""
import json
import os

import pytest

from beefdock.MANAGERS.environment_manager import EnvironmentManager
from beefdock.MANAGERS.preflight import Preflight
from beefdock.RUNNERS.command_runner import CommandResult, CommandRunner

NONE_TAG = "<none>"


class FakeRunner(CommandRunner):
    """
    Records every command and emulates a tiny docker image store.
    """

    def __init__(self):
        self.tools = {"curl", "docker", "jq"}
        self.calls = []
        self.images = []  # [repository, tag, id]
        self.curl_body = json.dumps({"sha": "abc123f"})
        self.curl_returncode = 0
        self.pull_fails = False
        self.build_fails = False
        self.rmi_failures = set()
        self.pulled_base_id = "base0002"
        self.built_id = "beef0002"
        self.recipes = []
        self.interrupt_on = None

    def which(self, tool):
        self.calls.append(["which", tool])
        return f"/usr/bin/{tool}" if tool in self.tools else None

    def commands(self, name):
        return [c for c in self.calls if c[0] == name]

    def docker_calls(self, sub):
        return [c for c in self.commands("docker") if c[1] == sub]

    def refs(self):
        return {f"{r}:{t}": i for r, t, i in self.images if t != NONE_TAG}

    def _ids_for(self, ref_or_id):
        refs = self.refs()
        if ref_or_id in refs:
            return refs[ref_or_id]
        if any(i == ref_or_id for _, _, i in self.images):
            return ref_or_id
        return None

    def _move_tag(self, ref, image_id):
        repo, tag = ref.rsplit(":", 1)
        old = self.refs().get(ref)
        self.images = [e for e in self.images if not (e[0] == repo and e[1] == tag)]
        if old and old != image_id and not any(i == old for _, _, i in self.images):
            self.images.append([repo, NONE_TAG, old])
        self.images = [e for e in self.images if not (e[2] == image_id and e[1] == NONE_TAG)]
        self.images.append([repo, tag, image_id])

    def run(self, command, cwd=None, capture=False, input=None):
        command = list(command)
        self.calls.append(command)
        if self.interrupt_on and command[:2] == self.interrupt_on:
            raise KeyboardInterrupt
        name = command[0]
        if name == "curl":
            return CommandResult(command, self.curl_returncode, self.curl_body)
        if name == "jq":
            try:
                sha = json.loads(input).get("sha")
            except ValueError:
                return CommandResult(command, 5, "", "parse error")
            return CommandResult(command, 0, "null\n" if sha is None else f"{sha}\n")
        if name == "docker":
            return self._docker(command, cwd)
        return CommandResult(command, 127, "", "not found")

    def _docker(self, command, cwd):
        sub = command[1]
        if sub == "images":
            out = "".join(f"{r}\t{t}\t{i}\n" for r, t, i in self.images)
            return CommandResult(command, 0, out)
        if sub == "image" and command[2] == "tag":
            image_id = self._ids_for(command[3])
            if image_id is None:
                return CommandResult(command, 1)
            self._move_tag(command[4], image_id)
            return CommandResult(command, 0)
        if sub == "pull":
            if self.pull_fails:
                return CommandResult(command, 1)
            self._move_tag(command[2], self.pulled_base_id)
            return CommandResult(command, 0)
        if sub == "build":
            with open(os.path.join(cwd, "Dockerfile")) as f:
                self.recipes.append(f.read())
            if self.build_fails:
                return CommandResult(command, 1)
            self._move_tag(command[command.index("-t") + 1], self.built_id)
            return CommandResult(command, 0)
        if sub == "rmi":
            target = command[2]
            if target in self.rmi_failures:
                return CommandResult(command, 1)
            repo_tag = target.rsplit(":", 1)
            before = len(self.images)
            if target in self.refs():
                self.images = [e for e in self.images if [e[0], e[1]] != repo_tag]
            else:
                self.images = [e for e in self.images if e[2] != target]
            return CommandResult(command, 0 if len(self.images) < before else 1)
        return CommandResult(command, 1)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def docker_member():
    """Preflight for a non-root user in the docker group."""
    def make(runner):
        return Preflight(runner, uid_provider=lambda: 1000, groups_provider=lambda: ["users", "docker"])
    return make


@pytest.fixture
def env_manager(tmp_path):
    return EnvironmentManager(base_dir=str(tmp_path))
