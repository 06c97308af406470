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
Command Line Interface for beefdock.
"""
import click
from ..MANAGERS.build_orchestrator import BuildOrchestrator


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx, args):
    """
    Build a beef docker image that uses local user/group IDs.

    Arguments are handed to the build orchestrator unchanged so it can
    apply its own exit codes to malformed options.
    """
    orchestrator = ctx.obj.get('orchestrator') if ctx.obj else None
    if orchestrator is None:
        orchestrator = BuildOrchestrator(prog_name=ctx.info_name or "beefdock")
    ctx.exit(orchestrator.run(list(args)))


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
