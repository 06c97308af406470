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
Builder that turns a rendered recipe into the beef image.
"""
from ..MANAGERS.image_manager import DockerImageManager
from ..MODELS.build_options import ProxySettings
from ..MODELS.builder_config import BuilderConfig
from ..MODELS.errors import BuildError, WorkspaceError
from ..UTILS.console import Console
from ..UTILS.workspace import BuildWorkspace


class ImageBuilder:
    """
    Pulls the base image and builds the recipe found in a workspace.
    """
    def __init__(self, images: DockerImageManager, config: BuilderConfig, console: Console):
        """
        Initializes the ImageBuilder.

        :param images: Docker image manager.
        :param config: Builder configuration naming the base and target image.
        :param console: Console for operator diagnostics.
        """
        self.images = images
        self.config = config
        self.console = console

    def build(self, workspace: BuildWorkspace, proxy: ProxySettings):
        """
        Pulls the base image fresh and builds the workspace's recipe.

        A base image that was not present before the pull is removed again
        after a successful build.

        :param workspace: Workspace holding the rendered recipe.
        :param proxy: Proxy settings forwarded as build arguments.
        :raises BuildError: If the pull or the build fails.
        :raises WorkspaceError: If the workspace directory is gone.
        """
        base_present = self.images.has_image(self.config.base_repositories, self.config.base_tag)

        self.console.info("Building image...")
        self.console.info("This may take a long time...")

        # Always pull so upstream security fixes are picked up.
        if not self.images.pull(self.config.base_image).ok:
            raise BuildError(f"Failed to pull {self.config.base_image}")

        if not workspace.exists():
            raise WorkspaceError(f"{workspace.path} not found")

        result = self.images.build(workspace.path, self.config.image_reference, proxy.build_args())
        if not result.ok:
            raise BuildError(f"Failed to build {self.config.image_reference}")

        if not base_present:
            if not self.images.remove(self.config.base_image).ok:
                self.console.warn(f"Could not remove {self.config.base_image}")
