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
Providers answering yes/no questions put to the operator.
"""
from typing import Iterable, Iterator
import click

YES_KEYS = ("y", "Y")
NO_KEYS = ("", "n", "N", "q", "Q")


class ConfirmationProvider:
    """
    Interface for asking the operator a yes/no question.
    """
    def ask(self, prompt: str) -> bool:
        raise NotImplementedError


class KeypressConfirmation(ConfirmationProvider):
    """
    Reads a single keypress from the terminal. Enter, ``n`` and ``q``
    decline, ``y`` accepts and any other key asks again.
    """
    def read_key(self) -> str:
        key = click.getchar(echo=False)
        return "" if key in ("\r", "\n") else key

    def ask(self, prompt: str) -> bool:
        while True:
            click.echo(prompt, nl=False)
            key = self.read_key()
            click.echo()
            if key in YES_KEYS:
                return True
            if key in NO_KEYS:
                return False
            click.echo("Invalid choice")


class ScriptedConfirmation(KeypressConfirmation):
    """
    Answers from a fixed sequence of keys, for unattended runs and tests.
    Running out of keys counts as Enter.
    """
    def __init__(self, keys: Iterable[str] = ()):
        self._keys: Iterator[str] = iter(keys)
        self.asked = 0

    def read_key(self) -> str:
        return next(self._keys, "")

    def ask(self, prompt: str) -> bool:
        self.asked += 1
        return super().ask(prompt)
