# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""Command line tools for re-serializing XML files.

Every module in :mod:`scopedxml._scripts` that defines a ``main``
command is available as a subcommand, named after the module with
underscores replaced by dashes.
"""

import contextlib
import importlib
import importlib.resources as imr
import logging

import click

from . import _scripts

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


class ScriptsGroup(click.Group):
    """Load subcommands from :mod:`scopedxml._scripts` on demand."""

    def list_commands(self, ctx):
        cmds = {
            i.name.removesuffix(".py").replace("_", "-")
            for i in imr.files(_scripts).iterdir()
            if i.name.endswith(".py") and not i.name.startswith("_")
        }
        return sorted(cmds.union(super().list_commands(ctx)))

    def get_command(self, ctx, name):
        if cmd := super().get_command(ctx, name):
            return cmd

        with contextlib.suppress(ImportError):
            module = importlib.import_module(
                f"{_scripts.__name__}.{name.replace('-', '_')}"
            )
            cmd = getattr(module, "main", None)
            if isinstance(cmd, click.Command):
                cmd.name = name
                return cmd
        return None


@click.group(cls=ScriptsGroup, no_args_is_help=True)
@click.version_option(package_name="scopedxml")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log more details, repeat for even more",
)
def main(verbose: int) -> None:
    """Work with XML files while keeping their namespaces intact."""
    level = LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level)


if __name__ == "__main__":
    main()
