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
Unit tests for command line option parsing.
"""
import itertools
import pytest
from beefdock.MODELS.build_options import BuildOptions
from beefdock.MODELS.errors import UsageError
from beefdock.PARSERS.options_parser import OptionsParser


class TestOptionsParser:
    """Tests for OptionsParser."""

    def setup_method(self):
        self.parser = OptionsParser()

    def test_defaults(self):
        """No arguments yields the default options."""
        opts = self.parser.parse([])
        assert opts == BuildOptions(branch="master", color_enabled=True, help_requested=False)

    @pytest.mark.parametrize("args", [
        ["--branch=develop"],
        ["--branch", "develop"],
        ["-b", "develop"],
    ])
    def test_branch_forms(self, args):
        """All three branch spellings are accepted."""
        assert self.parser.parse(args).branch == "develop"

    def test_empty_branch_value(self):
        """--branch= with no value is a malformed option."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["--branch="])
        assert exc.value.exit_code == 127

    @pytest.mark.parametrize("args", [["--branch"], ["-b"], ["--no-color", "-b"]])
    def test_missing_branch_value(self, args):
        """A trailing branch flag without value is a malformed option."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(args)
        assert exc.value.exit_code == 127

    @pytest.mark.parametrize("branch", ["foo;rm -rf /", "$(id)", "-x", "a..b", "a b", "`x`"])
    def test_unsafe_branch_rejected(self, branch):
        """Branches with characters outside the allow-list are rejected."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["--branch", branch])
        assert exc.value.exit_code == 127

    def test_help(self):
        """-h and --help request the usage text."""
        assert self.parser.parse(["-h"]).help_requested
        assert self.parser.parse(["--help"]).help_requested

    def test_help_wins_over_leftover(self):
        """Help is honoured even with stray arguments."""
        assert self.parser.parse(["stray", "--help"]).help_requested

    def test_no_color(self):
        """--no-color disables colour."""
        assert self.parser.parse(["--no-color"]).color_enabled is False

    def test_leftover_arguments(self):
        """Positional arguments are extraneous."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["extra"])
        assert exc.value.exit_code == 1

    def test_double_dash_ends_options(self):
        """Everything after -- is left over, even flags."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["--", "--no-color"])
        assert exc.value.exit_code == 1

    def test_usage_error_keeps_no_color(self):
        """A rejected command line still honours --no-color before --."""
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["--no-color", "extra"])
        assert exc.value.color_enabled is False
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["--branch=", "--no-color"])
        assert exc.value.color_enabled is False
        with pytest.raises(UsageError) as exc:
            self.parser.parse(["extra"])
        assert exc.value.color_enabled is True

    def test_last_branch_wins(self):
        """A repeated flag keeps its last value."""
        opts = self.parser.parse(["-b", "one", "--branch=two", "--branch", "three"])
        assert opts.branch == "three"

    def test_order_independent(self):
        """Any ordering of the recognised flags gives the same options."""
        flags = [["--no-color"], ["--branch=feature/x"], ["--help"]]
        results = {
            self.parser.parse(list(itertools.chain.from_iterable(p)))
            for p in itertools.permutations(flags)
        }
        assert len(results) == 1
        opts = results.pop()
        assert opts.branch == "feature/x"
        assert opts.color_enabled is False
        assert opts.help_requested is True

    def test_options_are_immutable(self):
        """BuildOptions cannot be changed after parsing."""
        opts = self.parser.parse([])
        with pytest.raises(Exception):
            opts.branch = "other"
