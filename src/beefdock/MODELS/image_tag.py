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
Models representing entries of the container engine's image table.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict

NONE_TAG = "<none>"
BASE_REPOSITORIES = ("alpine", "docker.io/alpine")


class ImageClass(str, Enum):
    """
    How an image relates to the beef build.
    """
    CURRENT = "current"
    STALE_BEEF = "stale-beef"
    STALE_BASE = "stale-base"
    UNTAGGED = "untagged"
    OTHER = "other"


class ImageTag(BaseModel):
    """
    A single repository/tag pair as listed by ``docker images``.
    """
    model_config = ConfigDict(frozen=True)

    repository: str
    tag: str
    image_id: str

    @property
    def reference(self) -> str:
        return f"{self.repository}:{self.tag}"

    def classify(self, image_name: str = "beef_alpine",
                 current_tag: str = "latest",
                 base_repositories=BASE_REPOSITORIES) -> ImageClass:
        """
        Classifies the tag against the beef image name and the base image.

        :param image_name: Repository of the built image.
        :param current_tag: Tag marking the current build.
        :param base_repositories: Repository names the base image is listed under.
        :return: The ImageClass of this tag.
        """
        if self.repository == image_name:
            if self.tag == current_tag:
                return ImageClass.CURRENT
            if self.tag != NONE_TAG:
                return ImageClass.STALE_BEEF
        if self.repository in base_repositories and self.tag == NONE_TAG:
            return ImageClass.STALE_BASE
        if self.tag == NONE_TAG:
            return ImageClass.UNTAGGED
        return ImageClass.OTHER
