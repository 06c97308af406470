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
Orchestration of a single image build run, from option parsing to the
cleanup of stale images.
"""
from enum import Enum
from typing import Dict, Optional, Sequence

from .environment_manager import EnvironmentManager
from .image_manager import DockerImageManager
from .image_reconciler import ImageReconciler
from .preflight import Preflight
from ..BUILDERS.image_builder import ImageBuilder
from ..BUILDERS.recipe_builder import RecipeBuilder
from ..MODELS.build_options import BuildOptions
from ..MODELS.builder_config import BuilderConfig
from ..MODELS.errors import BeefDockError, InterruptedBuildError, UsageError
from ..PARSERS.options_parser import OptionsParser
from ..RUNNERS.command_runner import CommandRunner
from ..RUNNERS.commit_resolver import CommitResolver
from ..UTILS.confirmation import ConfirmationProvider, KeypressConfirmation
from ..UTILS.console import Console
from ..UTILS.workspace import BuildWorkspace

USAGE_TEMPLATE = """Usage: {prog} [OPTIONS]

Build a beef docker image that uses local user/group IDs.

Options:
    -b, --branch=BRANCH    Use specified beef branch (default: master)
    -h, --help             Display this help message
    --no-color             Disable colorized output
"""

RUN_HINT_TEMPLATE = """
It's suggested you add something like the following to your ~/.bashrc:

{name}() {{
    local rm
    case "$1" in
        "-r"|"--rm") rm="--rm" && shift ;;
    esac

    sudo iptables -I INPUT -p tcp --dport 3000 -j ACCEPT
    sudo iptables -I INPUT -p udp --dport 3000 -j ACCEPT
    sudo iptables -I INPUT -p tcp --dport 6789 -j ACCEPT
    sudo iptables -I INPUT -p udp --dport 6789 -j ACCEPT

    mkdir -p /tmp/beef
    docker run --cap-drop=ALL -i --name beef_$(date +%F_%H%M%S%N) \\
        -p 3000:3000 -p 6789:6789 $rm -tv /tmp/beef:/beef:Z \\
        {reference} $@

    sudo iptables -D INPUT -p tcp --dport 3000 -j ACCEPT
    sudo iptables -D INPUT -p udp --dport 3000 -j ACCEPT
    sudo iptables -D INPUT -p tcp --dport 6789 -j ACCEPT
    sudo iptables -D INPUT -p udp --dport 6789 -j ACCEPT
}}
alias beef="{name} --rm ./beef"
"""


class BuildState(str, Enum):
    """
    Steps of a run, in order. A failed run stays at the last step it reached.
    """
    INIT = "init"
    OPTIONS_PARSED = "options-parsed"
    DEPENDENCIES_CHECKED = "dependencies-checked"
    PERMISSIONS_CHECKED = "permissions-checked"
    COMMIT_RESOLVED = "commit-resolved"
    RECIPE_RENDERED = "recipe-rendered"
    IMAGES_TAGGED = "images-tagged"
    IMAGE_BUILT = "image-built"
    STALE_IMAGES_RECONCILED = "stale-images-reconciled"
    DONE = "done"


class BuildOrchestrator:
    """
    Runs the build workflow and maps its outcome to a process exit code.

    Every failure is terminal: the remaining steps are skipped, the
    workspace is removed and the error's exit code is returned.
    """

    def __init__(
        self,
        env_manager: Optional[EnvironmentManager] = None,
        runner: Optional[CommandRunner] = None,
        confirm: Optional[ConfirmationProvider] = None,
        preflight: Optional[Preflight] = None,
        environ: Optional[Dict[str, str]] = None,
        prog_name: str = "beefdock",
    ):
        """
        Initializes the orchestrator.

        :param env_manager: Source of the builder configuration and proxy settings.
        :param runner: Runner for all external commands.
        :param confirm: Provider answering the stale image removal prompt.
        :param preflight: Dependency and permission checks.
        :param environ: Environment to read instead of ``os.environ``.
        :param prog_name: Program name shown in the usage text.
        """
        self.env_manager = env_manager or EnvironmentManager()
        self.runner = runner or CommandRunner()
        self.confirm = confirm or KeypressConfirmation()
        self.preflight = preflight or Preflight(self.runner)
        self.environ = environ
        self.prog_name = prog_name
        self.state = BuildState.INIT
        self.console = Console()
        self.options: Optional[BuildOptions] = None

    @property
    def usage(self) -> str:
        return USAGE_TEMPLATE.format(prog=self.prog_name)

    def run(self, args: Sequence[str]) -> int:
        """
        Runs the whole workflow.

        :param args: Command line arguments without the program name.
        :return: The process exit code.
        """
        self.state = BuildState.INIT
        try:
            self.options = OptionsParser().parse(list(args))
        except UsageError as e:
            self.console = Console(e.color_enabled)
            self.console.err(e.message)
            self.console.echo(self.usage)
            return e.exit_code
        self.state = BuildState.OPTIONS_PARSED
        self.console = Console(self.options.color_enabled)

        if self.options.help_requested:
            self.console.echo(self.usage)
            return 0

        try:
            config = self.env_manager.load_config(self.environ)
            self._execute(self.options, config)
        except KeyboardInterrupt:
            error = InterruptedBuildError()
            self.console.err(error.message)
            return error.exit_code
        except BeefDockError as e:
            self.console.err(e.message)
            return e.exit_code

        self.console.echo(RUN_HINT_TEMPLATE.format(
            name=config.image_name, reference=config.image_reference
        ))
        return 0

    def _execute(self, options: BuildOptions, config: BuilderConfig):
        self.preflight.check_dependencies(config.required_tools)
        self.state = BuildState.DEPENDENCIES_CHECKED

        self.preflight.check_permissions(config.engine_group)
        self.state = BuildState.PERMISSIONS_CHECKED

        images = DockerImageManager(self.runner)
        reconciler = ImageReconciler(images, config, self.console)
        resolver = CommitResolver(self.runner, api_url=config.api_url)

        with BuildWorkspace(config.base_dir, config.workspace_name) as workspace:
            commit = resolver.resolve(config.repository, options.branch)
            self.console.subinfo(f"{options.branch} is at {commit.sha}")
            self.state = BuildState.COMMIT_RESOLVED

            workspace.write_recipe(RecipeBuilder(config).render(options, commit))
            self.state = BuildState.RECIPE_RENDERED

            reconciler.tag_existing()
            self.state = BuildState.IMAGES_TAGGED

            proxy = self.env_manager.load_proxy(self.environ)
            ImageBuilder(images, config, self.console).build(workspace, proxy)
            self.console.good("done")
            self.state = BuildState.IMAGE_BUILT

            reconciler.reconcile(self.confirm)
            self.state = BuildState.STALE_IMAGES_RECONCILED

        self.state = BuildState.DONE
