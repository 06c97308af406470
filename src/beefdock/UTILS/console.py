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
Colourised one-line diagnostics for the operator.
"""
import click

# prefix, colour
LEVELS = {
    "err": ("[!]", "red"),
    "good": ("[+]", "green"),
    "info": ("[*]", "white"),
    "subinfo": ("[=]", "cyan"),
    "warn": ("[-]", "yellow"),
}


class Console:
    """
    Prints prefixed status lines, coloured unless colour is disabled.
    """
    def __init__(self, color_enabled: bool = True):
        self.color_enabled = color_enabled

    def _emit(self, level: str, message: str):
        prefix, colour = LEVELS[level]
        line = f"{prefix} {message}"
        if self.color_enabled:
            line = click.style(line, fg=colour)
        click.echo(line)

    def err(self, message: str):
        self._emit("err", message)

    def good(self, message: str):
        self._emit("good", message)

    def info(self, message: str):
        self._emit("info", message)

    def subinfo(self, message: str):
        self._emit("subinfo", message)

    def warn(self, message: str):
        self._emit("warn", message)

    def echo(self, message: str = ""):
        """Plain, unprefixed output."""
        click.echo(message)
