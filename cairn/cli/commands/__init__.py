"""CLI commands for Cairn."""

from cairn.cli.commands.init import init_cmd
from cairn.cli.commands.stage import stage_cmd
from cairn.cli.commands.commit import commit_cmd
from cairn.cli.commands.diff import diff_cmd
from cairn.cli.commands.branch import branch_cmd
from cairn.cli.commands.checkout import checkout_cmd
from cairn.cli.commands.config import config_cmd
from cairn.cli.commands.objects import cat_file_cmd, ls_tree_cmd

__all__ = ['init_cmd', 'stage_cmd', 'commit_cmd', 'diff_cmd', 'branch_cmd',
           'checkout_cmd', 'config_cmd', 'cat_file_cmd', 'ls_tree_cmd']
