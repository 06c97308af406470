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
Execution of external commands (docker, curl, jq) as blocking subprocesses.
"""
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional

# Exit status a shell reports for a command it cannot execute.
COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    """Outcome of a finished command."""

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """
    Runs external commands synchronously.

    Captured commands return their output; streamed commands inherit the
    terminal so the operator sees pull and build progress.
    """
    def which(self, tool: str) -> Optional[str]:
        """
        Locates a tool on the search path.

        Args:
            tool (str): Executable name.

        Returns:
            Optional[str]: Full path, or None if the tool is not installed.
        """
        return shutil.which(tool)

    def run(self,
            command: List[str],
            cwd: Optional[str] = None,
            capture: bool = False,
            input: Optional[str] = None) -> CommandResult:
        """
        Runs a command to completion.

        Args:
            command (List[str]): Command and arguments to execute.
            cwd (Optional[str]): Directory to run the command in.
            capture (bool): Capture stdout/stderr instead of streaming them.
            input (Optional[str]): Text fed to the command's stdin.

        Returns:
            CommandResult: Exit status and captured output.
        """
        if not capture and input is None:
            return self._stream(command, cwd)

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                input=input,
                capture_output=capture,
                text=True,
                # Avoid shell=True for security reasons (CWE-78)
                shell=False
            )
        except OSError as e:
            return CommandResult(args=list(command), returncode=COMMAND_NOT_FOUND, stderr=str(e))

        return CommandResult(
            args=list(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def _stream(self, command: List[str], cwd: Optional[str]) -> CommandResult:
        """
        Runs a command attached to the terminal.

        On Ctrl-C the child shares the terminal's SIGINT and is left to shut
        down on its own; the interrupt is re-raised once it has exited.
        """
        try:
            process = subprocess.Popen(command, cwd=cwd, shell=False)
        except OSError as e:
            return CommandResult(args=list(command), returncode=COMMAND_NOT_FOUND, stderr=str(e))

        try:
            returncode = process.wait()
        except KeyboardInterrupt:
            process.wait()
            raise
        return CommandResult(args=list(command), returncode=returncode)
