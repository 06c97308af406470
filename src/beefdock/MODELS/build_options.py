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
Models for the options and inputs of a single build run.
"""
import re
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, field_validator

BRANCH_PATTERN = re.compile(r'^[A-Za-z0-9._/-]+$')
SHA_PATTERN = re.compile(r'^[0-9a-f]{4,40}$')


class BuildOptions(BaseModel):
    """
    Options parsed from the command line. Built once and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    branch: str = "master"
    color_enabled: bool = True
    help_requested: bool = False

    @field_validator('branch')
    @classmethod
    def check_branch(cls, value: str) -> str:
        """
        Restricts branch names to characters that are safe inside the recipe.
        """
        if not BRANCH_PATTERN.fullmatch(value):
            raise ValueError(f"invalid branch name: {value!r}")
        if value.startswith(('-', '/')) or '..' in value:
            raise ValueError(f"invalid branch name: {value!r}")
        return value


class ProxySettings(BaseModel):
    """
    Proxy settings forwarded to the image build as build arguments.
    """
    model_config = ConfigDict(frozen=True)

    http: Optional[str] = None
    https: Optional[str] = None

    @classmethod
    def from_environment(cls, env: Dict[str, str]) -> "ProxySettings":
        # Empty values count as unset, like ${http_proxy:+...} in a shell.
        return cls(http=env.get('http_proxy') or None,
                   https=env.get('https_proxy') or None)

    def build_args(self) -> Dict[str, str]:
        args = {}
        if self.http:
            args['http_proxy'] = self.http
        if self.https:
            args['https_proxy'] = self.https
        return args


class ResolvedCommit(BaseModel):
    """
    The commit a branch pointed at when the build started.
    """
    model_config = ConfigDict(frozen=True)

    sha: str

    @field_validator('sha')
    @classmethod
    def check_sha(cls, value: str) -> str:
        value = value.strip()
        if not SHA_PATTERN.fullmatch(value):
            raise ValueError(f"not a commit sha: {value!r}")
        return value
