"""CLI commands for gitpeek."""

from gitpeek.cli.commands.branch import branch_cmd
from gitpeek.cli.commands.cat_file import cat_file_cmd

__all__ = ['branch_cmd', 'cat_file_cmd']
