# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Resolution of a branch name to the commit it currently points at.
"""
from pydantic import ValidationError
from .command_runner import CommandRunner
from ..MODELS.build_options import ResolvedCommit
from ..MODELS.errors import NetworkError


class CommitResolver:
    """
    Looks up the latest commit of a branch through the GitHub commits API.

    The response is fetched with curl and the ``sha`` field extracted with jq,
    the same tools the dependency check requires. A failure is never retried.
    """
    def __init__(self, runner: CommandRunner, api_url: str = "https://api.github.com"):
        """
        :param runner: Runner used for the curl and jq invocations.
        :param api_url: Base URL of the commits API.
        """
        self.runner = runner
        self.api_url = api_url.rstrip("/")

    def commit_url(self, repository: str, branch: str) -> str:
        return f"{self.api_url}/repos/{repository}/commits/{branch}"

    def resolve(self, repository: str, branch: str) -> ResolvedCommit:
        """
        Resolves ``branch`` of ``repository`` to a commit.

        :param repository: ``owner/name`` slug.
        :param branch: Branch name.
        :return: The resolved commit.
        :raises NetworkError: If the request or the response parsing fails.
        """
        url = self.commit_url(repository, branch)
        fetched = self.runner.run(["curl", "-Ls", url], capture=True)
        if not fetched.ok or not fetched.stdout.strip():
            raise NetworkError(f"Failed to fetch {url}")

        parsed = self.runner.run(["jq", "-cMrS", ".sha"], capture=True, input=fetched.stdout)
        if not parsed.ok:
            raise NetworkError(f"Invalid response from {url}")

        sha = parsed.stdout.strip()
        if not sha or sha == "null":
            raise NetworkError(f"No commit found for branch {branch}")
        try:
            return ResolvedCommit(sha=sha)
        except ValidationError as e:
            raise NetworkError(f"Invalid commit for branch {branch}: {sha}") from e
