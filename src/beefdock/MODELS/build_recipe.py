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
Models for the structured build recipe and its Dockerfile serialization.
"""
import json
from typing import List
from jinja2 import Template
from pydantic import BaseModel, ConfigDict

RECIPE_TEMPLATE = """
{%- for inst in instructions %}
{%- for comment in inst.comments %}
# {{ comment }}
{%- endfor %}
{{ inst.raw }}
{% endfor -%}
"""


class Instruction(BaseModel):
    """
    Represents a single instruction of the recipe.

    ``arguments`` holds shell-form text for RUN/FROM/WORKDIR and the
    exec-form list for SHELL/CMD. ``comments`` are emitted above it.
    """
    model_config = ConfigDict(frozen=True)

    instruction: str
    arguments: List[str]
    exec_form: bool = False
    comments: List[str] = []

    @property
    def raw(self) -> str:
        if self.exec_form:
            return f"{self.instruction} {json.dumps(self.arguments)}"
        return f"{self.instruction} {' '.join(self.arguments)}"


class RecipeStep(BaseModel):
    """
    A group of shell commands chained with ``&&`` inside one RUN layer.
    """
    model_config = ConfigDict(frozen=True)

    description: str
    commands: List[str]


class BuildRecipe(BaseModel):
    """
    The generated Dockerfile equivalent. Write-once, consumed by the build.
    """
    model_config = ConfigDict(frozen=True)

    instructions: List[Instruction] = []

    def render(self) -> str:
        """
        Serializes the recipe to Dockerfile text.
        """
        template = Template(RECIPE_TEMPLATE, keep_trailing_newline=True)
        return template.render(instructions=self.instructions).lstrip("\n")
