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
Checks that must pass before any network or container call is made.
"""
import grp
import os
from typing import Callable, Iterable, List
from ..MODELS.errors import DependencyError, PermissionDeniedError
from ..RUNNERS.command_runner import CommandRunner


def current_group_names() -> List[str]:
    """
    Names of the groups the current process belongs to, like ``id -Gn``.
    """
    names = []
    for gid in [os.getegid()] + os.getgroups():
        try:
            name = grp.getgrgid(gid).gr_name
        except KeyError:
            continue
        if name not in names:
            names.append(name)
    return names


class Preflight:
    """
    Verifies required tools and the privilege to use the container engine.
    """
    def __init__(self,
                 runner: CommandRunner,
                 uid_provider: Callable[[], int] = os.geteuid,
                 groups_provider: Callable[[], List[str]] = current_group_names):
        """
        :param runner: Runner used to locate tools on the search path.
        :param uid_provider: Returns the effective user id.
        :param groups_provider: Returns the current user's group names.
        """
        self.runner = runner
        self.uid_provider = uid_provider
        self.groups_provider = groups_provider

    def check_dependencies(self, required: Iterable[str]):
        """
        Fails on the first tool not found on the search path.

        :raises DependencyError: Naming the missing tool.
        """
        for tool in required:
            if not self.runner.which(tool):
                raise DependencyError(tool)

    def check_permissions(self, group: str = "docker"):
        """
        Root is always allowed. Anyone else must be in ``group``.

        :raises PermissionDeniedError: If neither holds.
        """
        if self.uid_provider() == 0:
            return
        if group not in self.groups_provider():
            raise PermissionDeniedError(f"You are not part of the {group} group")
