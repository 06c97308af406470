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
Configuration for the image builder.
"""
import re
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, field_validator

REPOSITORY_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$')
PASSWORD_PATTERN = re.compile(r'^[A-Za-z0-9_.@%+=:,-]+$')


def split_reference(reference: str) -> Tuple[str, str]:
    """
    Splits an image reference into repository and tag.

    Only a colon after the last slash starts the tag, so a registry port
    stays part of the repository. A missing tag means ``latest``.
    """
    repository, sep, tag = reference.rpartition(":")
    if not sep or "/" in tag:
        return reference, "latest"
    return repository, tag


class BuilderConfig(BaseModel):
    """
    Where the framework comes from and how the resulting image is named.
    """
    model_config = ConfigDict(frozen=True)

    repository: str = "mjwhitta/beef"
    api_url: str = "https://api.github.com"
    image_name: str = "beef_alpine"
    image_tag: str = "latest"
    base_image: str = "alpine:latest"
    workspace_name: str = ".docker_alpine"
    base_dir: str = "."
    password: str = "cake"
    required_tools: List[str] = ["curl", "docker", "jq"]
    engine_group: str = "docker"

    @field_validator('repository')
    @classmethod
    def check_repository(cls, value: str) -> str:
        if not REPOSITORY_PATTERN.fullmatch(value):
            raise ValueError(f"repository must be owner/name, got {value!r}")
        return value

    @field_validator('password')
    @classmethod
    def check_password(cls, value: str) -> str:
        # Substituted into a sed expression inside the recipe.
        if not PASSWORD_PATTERN.fullmatch(value):
            raise ValueError("password contains unsupported characters")
        return value

    @property
    def image_reference(self) -> str:
        return f"{self.image_name}:{self.image_tag}"

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.repository}.git"

    @property
    def base_repository(self) -> str:
        return split_reference(self.base_image)[0]

    @property
    def base_tag(self) -> str:
        return split_reference(self.base_image)[1]

    @property
    def base_repositories(self) -> Tuple[str, str]:
        """Names the engine may list the base image repository under."""
        name = self.base_repository
        return (name, f"docker.io/{name}")
