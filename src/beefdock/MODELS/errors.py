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
Error taxonomy for the image build workflow.

Every error is terminal for a run and carries the process exit code the
CLI terminates with.
"""
from typing import Optional


class BeefDockError(Exception):
    """Base class for all build workflow failures."""

    exit_code = 1

    def __init__(self, message: str = "", exit_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(BeefDockError):
    """Bad command line input. Exit code 1 for extra arguments, 127 for malformed options."""

    exit_code = 127
    color_enabled = True


class DependencyError(BeefDockError):
    """A required external tool is not installed."""

    exit_code = 128

    def __init__(self, tool: str):
        super().__init__(f"{tool} is not installed")
        self.tool = tool


class PermissionDeniedError(BeefDockError):
    """The invoking user may not talk to the container engine."""

    exit_code = 2


class WorkspaceError(BeefDockError):
    """The temporary recipe directory vanished before the build."""

    exit_code = 3


class NetworkError(BeefDockError):
    """Commit resolution failed."""

    exit_code = 4


class BuildError(BeefDockError):
    """The container engine failed to pull the base image or build."""

    exit_code = 5


class InterruptedBuildError(BeefDockError):
    """The operator cancelled the run."""

    exit_code = 126

    def __init__(self, message: str = "Interrupted"):
        super().__init__(message)


class ConfigurationError(BeefDockError):
    """The environment holds an invalid builder setting."""

    exit_code = 6
