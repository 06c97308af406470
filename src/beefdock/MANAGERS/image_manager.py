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
Thin wrapper around the docker CLI's image commands.
"""
from typing import Dict, List, Optional, Sequence
from ..MODELS.errors import BuildError
from ..MODELS.image_tag import ImageTag
from ..PARSERS.image_list_parser import IMAGE_LIST_FORMAT, ImageListParser
from ..RUNNERS.command_runner import CommandResult, CommandRunner


class DockerImageManager:
    """
    Lists, tags, pulls, builds and removes images through the docker CLI.

    Every method blocks until the docker command returns. Pull, build and
    rmi stream their output to the terminal.
    """

    def __init__(self, runner: CommandRunner, executable: str = "docker"):
        """
        Args:
            runner: Runner used for all docker invocations.
            executable: Name of the docker client executable.
        """
        self.runner = runner
        self.executable = executable
        self.parser = ImageListParser()

    def list_images(self) -> List[ImageTag]:
        """
        Returns every repository/tag pair in the local image store.

        Raises:
            BuildError: If docker cannot list the images.
        """
        result = self.runner.run(
            [self.executable, "images", "--format", IMAGE_LIST_FORMAT], capture=True
        )
        if not result.ok:
            raise BuildError(f"Failed to list images: {result.stderr.strip()}")
        return self.parser.parse_from_string(result.stdout)

    def has_image(self, repositories: Sequence[str], tag: str) -> bool:
        """Check whether any of ``repositories`` is present with ``tag``."""
        return any(
            image.repository in repositories and image.tag == tag
            for image in self.list_images()
        )

    def tag(self, source: str, target: str) -> CommandResult:
        """Apply ``target`` to the image ``source`` refers to."""
        return self.runner.run([self.executable, "image", "tag", source, target], capture=True)

    def pull(self, reference: str) -> CommandResult:
        """Pull ``reference`` from its registry."""
        return self.runner.run([self.executable, "pull", reference])

    def build(
        self,
        context_dir: str,
        reference: str,
        build_args: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        """
        Build the recipe found in ``context_dir`` and tag it ``reference``.

        Args:
            context_dir: Directory holding the Dockerfile.
            reference: Tag for the resulting image.
            build_args: Values passed as ``--build-arg KEY=VALUE``.
        """
        command = [self.executable, "build"]
        for key, value in (build_args or {}).items():
            command += ["--build-arg", f"{key}={value}"]
        command += ["-t", reference, "."]
        return self.runner.run(command, cwd=context_dir)

    def remove(self, reference: str) -> CommandResult:
        """Remove a tag, or the image itself when given an image ID."""
        return self.runner.run([self.executable, "rmi", reference])
