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
Parser for the builder's command line options.
"""
from typing import List, Sequence, Tuple
from pydantic import ValidationError
from ..MODELS.build_options import BuildOptions
from ..MODELS.errors import UsageError

BRANCH_FLAGS = ("-b", "--branch")
HELP_FLAGS = ("-h", "--help")
NO_COLOR_FLAG = "--no-color"


class OptionsParser:
    """
    Parses raw arguments into an immutable BuildOptions value.

    Later occurrences of a repeated flag override earlier ones. A ``--``
    ends option parsing and everything after it is left over.
    """
    def parse(self, args: Sequence[str]) -> BuildOptions:
        """
        Parses the argument list.

        Args:
            args (Sequence[str]): Arguments without the program name.

        Returns:
            BuildOptions: The parsed options.

        Raises:
            UsageError: exit code 127 for a missing or malformed option value,
                exit code 1 for leftover arguments.
        """
        try:
            return self._parse(args)
        except UsageError as e:
            # --no-color applies to the diagnostic of a rejected command line too
            e.color_enabled = NO_COLOR_FLAG not in self._option_args(args)
            raise

    def _parse(self, args: Sequence[str]) -> BuildOptions:
        values = {}
        leftover: List[str] = []
        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--":
                leftover.extend(args[i + 1:])
                break
            if arg in BRANCH_FLAGS or arg.startswith("--branch="):
                values["branch"], consumed = self._option_value(args, i)
                i += consumed
            elif arg in HELP_FLAGS:
                values["help_requested"] = True
            elif arg == NO_COLOR_FLAG:
                values["color_enabled"] = False
            else:
                leftover.append(arg)
            i += 1

        try:
            options = BuildOptions(**values)
        except ValidationError as e:
            raise UsageError(f"Invalid branch: {values.get('branch')}", exit_code=127) from e

        if leftover and not options.help_requested:
            raise UsageError(f"Unexpected arguments: {' '.join(leftover)}", exit_code=1)
        return options

    @staticmethod
    def _option_value(args: Sequence[str], index: int) -> Tuple[str, int]:
        """
        Returns the value of the option at ``index`` and how many extra
        tokens it consumed.
        """
        arg = args[index]
        if arg.startswith("--") and "=" in arg:
            value = arg.split("=", 1)[1]
            consumed = 0
        else:
            if index + 1 >= len(args):
                raise UsageError(f"{arg} requires a value", exit_code=127)
            value = args[index + 1]
            consumed = 1
        if not value:
            raise UsageError(f"{arg.split('=', 1)[0]} requires a value", exit_code=127)
        return value, consumed

    @staticmethod
    def _option_args(args: Sequence[str]) -> Sequence[str]:
        """Returns the arguments before a ``--`` separator."""
        if "--" in args:
            return args[:list(args).index("--")]
        return args
