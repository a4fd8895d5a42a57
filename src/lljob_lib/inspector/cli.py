# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from lljob_lib.core.click_format import GNUHelpColorsCommand
from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobError
from lljob_lib.core.logger import get_logger
from lljob_lib.inspector.presenter import Presenter
from lljob_lib.render.parser import Parser

logger = get_logger(__name__)


@click.command(
    short_help="Display the contents of a job script.",
    help=f"""Parse a LoadLeveler job script and display its directives, requested resources and launch command.

{click.style("SCRIPT", fg="green")}   Path to the job script to inspect.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("script", type=str, metavar=click.style("SCRIPT", fg="green"))
@click.option(
    "-c",
    "--check",
    is_flag=True,
    help="Also check that the job script is complete and structurally valid.",
)
def inspect(script: str, check: bool) -> NoReturn:
    """
    Display information about the job described by the specified job script.
    """
    try:
        spec = Parser.fromFile(Path(script)).parse()

        console = Console()
        console.print(Presenter(spec).createInfoPanel(console))

        if spec.belowMinimumSize():
            logger.warning(
                f"bg_size '{spec.bg_size}' is below the scheduler minimum of {CFG.scheduler.min_bg_size}."
            )

        if check:
            spec.validate()
            logger.info(f"Job script '{script}' is valid.")

        sys.exit(0)
    except LLJobError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
