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
Builder for the structured recipe the beef image is built from.
"""
from typing import Dict, List, Optional
from ..MODELS.build_options import BuildOptions, ResolvedCommit
from ..MODELS.build_recipe import BuildRecipe, Instruction, RecipeStep
from ..MODELS.builder_config import BuilderConfig

INSTALL_ROOT = "/usr/share"
BASHRC = "/root/.bashrc"
SYSTEM_PACKAGES = ["git", "shadow", "sudo"]
ALIASES: Dict[str, str] = {
    "la": "\\ls -AF",
    "ll": "\\ls -Fhl",
    "ls": "\\ls -F",
    "q": "exit",
    "vim": "vi",
}
INDENT = "    "


class RecipeBuilder:
    """
    Turns build options and a pinned commit into a BuildRecipe.

    Rendering is pure: the same branch and commit always yield the same
    recipe text. Branch and commit are validated by their models before
    they get here.
    """
    def __init__(self, config: Optional[BuilderConfig] = None):
        """
        :param config: Builder configuration; defaults to BuilderConfig().
        """
        self.config = config or BuilderConfig()

    def build(self, options: BuildOptions, commit: ResolvedCommit) -> BuildRecipe:
        """
        Creates the structured recipe.

        :param options: Parsed build options.
        :param commit: Commit the framework checkout is pinned to.
        :return: The recipe.
        """
        steps = self.provisioning_steps(options.branch, commit.sha)
        instructions = [
            Instruction(instruction="FROM", arguments=[self.config.base_image],
                        comments=["Using super tiny alpine base image"]),
            Instruction(instruction="RUN", arguments=["apk upgrade && apk add bash"],
                        comments=["Install bash b/c it's better"]),
            Instruction(instruction="SHELL", arguments=["/bin/bash", "-c"], exec_form=True,
                        comments=["Bash is better than sh"]),
            Instruction(instruction="RUN", arguments=[self._layer(steps)],
                        comments=["All one RUN layer, splitting it up increases the image size"]
                        + [f"{n}. {step.description}" for n, step in enumerate(steps, 1)]),
            Instruction(instruction="WORKDIR", arguments=[self.install_dir],
                        comments=["Initialize env"]),
            Instruction(instruction="CMD", arguments=["/bin/bash"], exec_form=True),
        ]
        return BuildRecipe(instructions=instructions)

    def render(self, options: BuildOptions, commit: ResolvedCommit) -> str:
        """
        Builds and serializes the recipe in one go.
        """
        return self.build(options, commit).render()

    @property
    def install_dir(self) -> str:
        name = self.config.repository.rstrip("/").split("/")[-1]
        return f"{INSTALL_ROOT}/{name}"

    def provisioning_steps(self, branch: str, sha: str) -> List[RecipeStep]:
        """
        The groups of shell commands run in the single provisioning layer.
        """
        aliases = [f'echo "alias {name}=\\"{value}\\"" >>{BASHRC}' for name, value in ALIASES.items()]
        return [
            RecipeStep(description="Install dependencies",
                       commands=["apk upgrade", "apk add " + " ".join(SYSTEM_PACKAGES)]),
            RecipeStep(description="Add some convenient aliases to .bashrc",
                       commands=aliases),
            RecipeStep(description="Clone and install beef",
                       commands=[
                           f"cd {INSTALL_ROOT}",
                           f"git clone -b {branch} {self.config.clone_url}",
                           f"cd {self.install_dir}",
                           f"git checkout {sha}",
                           f'sed -i -r "s/passwd:.+/passwd: \\"{self.config.password}\\"/g" config.yaml',
                           'echo "y" | ./install',
                       ]),
            RecipeStep(description="Clean up unnecessary files and packages",
                       commands=["rm -rf /tmp/* /var/cache/apk/* /var/tmp/*"]),
        ]

    @staticmethod
    def _layer(steps: List[RecipeStep]) -> str:
        """
        Joins the steps into one ``set -o pipefail && ( ... ) && ( ... )`` command.
        """
        groups = []
        for step in steps:
            body = f" && \\\n{INDENT * 2}".join(step.commands)
            groups.append(f"( \\\n{INDENT * 2}{body} \\\n{INDENT})")
        return "set -o pipefail && \\\n" + INDENT + " && ".join(groups)
