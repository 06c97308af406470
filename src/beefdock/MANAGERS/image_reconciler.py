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
Reconciliation of previously built images: tagging them before a rebuild
and offering to remove the stale ones afterwards.
"""
from typing import List
from .image_manager import DockerImageManager
from ..MODELS.builder_config import BuilderConfig
from ..MODELS.image_tag import ImageClass, ImageTag
from ..UTILS.confirmation import ConfirmationProvider
from ..UTILS.console import Console

STALE_CLASSES = (ImageClass.STALE_BEEF, ImageClass.STALE_BASE)
REMOVE_PROMPT = "Remove old images (y/N/q)? "


class ImageReconciler:
    """
    Keeps superseded beef images addressable and cleans them up on request.
    """
    def __init__(self, images: DockerImageManager, config: BuilderConfig, console: Console):
        """
        :param images: Docker image manager.
        :param config: Builder configuration naming the image and base image.
        :param console: Console for operator diagnostics.
        """
        self.images = images
        self.config = config
        self.console = console

    def classify(self, image: ImageTag) -> ImageClass:
        return image.classify(
            image_name=self.config.image_name,
            current_tag=self.config.image_tag,
            base_repositories=self.config.base_repositories,
        )

    def tag_existing(self) -> List[str]:
        """
        Tags every beef image with its own image ID so the ``latest`` tag can
        move to the new build without leaving the old image untagged.

        :return: The references that were applied.
        """
        self.console.info("Tagging any old beef images")
        applied = []
        for image in self.images.list_images():
            if image.repository != self.config.image_name:
                continue
            target = f"{self.config.image_name}:{image.image_id}"
            if target in applied:
                continue
            result = self.images.tag(image.image_id, target)
            if result.ok:
                applied.append(target)
            else:
                self.console.warn(f"Could not tag {image.reference} as {target}")
        return applied

    def find_stale(self) -> List[ImageTag]:
        return [image for image in self.images.list_images() if self.classify(image) in STALE_CLASSES]

    def reconcile(self, confirm: ConfirmationProvider) -> List[str]:
        """
        Lists stale images and removes them if the operator agrees.
        Removal failures are reported and skipped.

        :param confirm: Provider answering the removal prompt.
        :return: References that were removed.
        """
        stale = self.find_stale()
        if not stale:
            return []

        self.console.echo()
        self.console.info("Old images:")
        self.console.echo(f"{'REPOSITORY':20} {'TAG':20} {'IMAGE ID':15}")
        for image in stale:
            self.console.echo(f"{image.repository:20} {image.tag:20} {image.image_id:15}")
        self.console.echo()

        if not confirm.ask(REMOVE_PROMPT):
            return []

        removed = []
        # Old beef images go by tag, old base images are untagged and go by ID.
        targets = [i.reference for i in stale if self.classify(i) == ImageClass.STALE_BEEF]
        targets += [i.image_id for i in stale if self.classify(i) == ImageClass.STALE_BASE]
        for target in dict.fromkeys(targets):
            result = self.images.remove(target)
            if result.ok:
                removed.append(target)
            else:
                self.console.err(f"Failed to remove {target}")
        return removed
