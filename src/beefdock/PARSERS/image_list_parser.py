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
Parser for the container engine's image listing.
"""
from typing import List
from ..MODELS.image_tag import ImageTag

# Go template passed to ``docker images --format``.
IMAGE_LIST_FORMAT = "{{.Repository}}\t{{.Tag}}\t{{.ID}}"


class ImageListParser:
    """
    Parses tab separated ``repository, tag, id`` rows into ImageTag models.
    """
    @staticmethod
    def parse_from_string(content: str) -> List[ImageTag]:
        """
        Parses the listing, skipping blank and malformed lines.
        """
        images = []
        for line in content.splitlines():
            line = line.strip()
            if not line:
                continue
            parts = line.split("\t")
            if len(parts) != 3:
                continue
            repository, tag, image_id = (p.strip() for p in parts)
            if not repository or not image_id:
                continue
            images.append(ImageTag(repository=repository, tag=tag or "<none>", image_id=image_id))
        return images
