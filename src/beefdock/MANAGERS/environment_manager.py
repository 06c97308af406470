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
Managers for resolving the builder configuration from the environment.
"""
import os
from typing import Dict, Optional
from dotenv import dotenv_values
from pydantic import ValidationError
from ..MODELS.build_options import ProxySettings
from ..MODELS.builder_config import BuilderConfig
from ..MODELS.errors import ConfigurationError

ENV_PREFIX = "BEEFDOCK_"
# Environment key suffix -> BuilderConfig field
CONFIG_KEYS = {
    "REPOSITORY": "repository",
    "API_URL": "api_url",
    "IMAGE_NAME": "image_name",
    "BASE_IMAGE": "base_image",
    "WORKSPACE": "workspace_name",
    "PASSWORD": "password",
}


class EnvironmentManager:
    """
    Merges the process environment with an optional ``.env`` file and
    derives the builder configuration and proxy settings from it.
    """
    def __init__(self, base_dir: str = ".", env_file: str = ".env"):
        """
        :param base_dir: Directory holding the ``.env`` file and the workspace.
        :param env_file: Name of the ``.env`` file, relative to ``base_dir``.
        """
        self.base_dir = base_dir
        self.env_file = env_file

    def get_merged_environment(self, environ: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Values from the ``.env`` file, overridden by the process environment.
        """
        merged: Dict[str, str] = {}
        file_path = os.path.join(self.base_dir, self.env_file)
        if os.path.exists(file_path):
            merged.update({k: v for k, v in dotenv_values(file_path).items() if v is not None})
        merged.update(os.environ if environ is None else environ)
        return merged

    def load_config(self, environ: Optional[Dict[str, str]] = None) -> BuilderConfig:
        """
        :raises ConfigurationError: If a ``BEEFDOCK_*`` value is invalid.
        """
        env = self.get_merged_environment(environ)
        values = {"base_dir": self.base_dir}
        for suffix, field in CONFIG_KEYS.items():
            value = env.get(ENV_PREFIX + suffix)
            if value:
                values[field] = value
        try:
            return BuilderConfig(**values)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise ConfigurationError(f"Invalid configuration: {fields}") from e

    def load_proxy(self, environ: Optional[Dict[str, str]] = None) -> ProxySettings:
        return ProxySettings.from_environment(self.get_merged_environment(environ))
