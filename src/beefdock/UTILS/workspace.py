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
Scoped ownership of the temporary directory the recipe is written to.
"""
import os
import shutil


class BuildWorkspace:
    """
    Context manager owning the dot-prefixed recipe directory.

    The directory is removed when the scope exits, whether it exits
    normally, through an error or through KeyboardInterrupt.
    """
    RECIPE_NAME = "Dockerfile"

    def __init__(self, base_dir: str = ".", name: str = ".docker_alpine"):
        """
        :param base_dir: Directory the workspace is created in.
        :param name: Name of the workspace directory.
        """
        self.path = os.path.join(base_dir, name)

    @property
    def recipe_path(self) -> str:
        return os.path.join(self.path, self.RECIPE_NAME)

    def __enter__(self) -> "BuildWorkspace":
        os.makedirs(self.path, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def write_recipe(self, text: str) -> str:
        """
        Writes the recipe file and returns its path.
        """
        with open(self.recipe_path, 'w') as f:
            f.write(text)
        return self.recipe_path

    def exists(self) -> bool:
        return os.path.isdir(self.path)

    def cleanup(self):
        shutil.rmtree(self.path, ignore_errors=True)
