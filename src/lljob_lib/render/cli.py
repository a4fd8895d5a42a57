# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from pathlib import Path
from typing import NoReturn

import click
from click_option_group import optgroup

from lljob_lib.core.click_format import GNUHelpColorsCommand
from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobError
from lljob_lib.core.logger import get_logger
from lljob_lib.render.factory import JobSpecFactory
from lljob_lib.render.renderer import Renderer

logger = get_logger(__name__)


@click.command(
    short_help="Render a LoadLeveler job script.",
    help=f"""
Render a LoadLeveler job script for a Blue Gene system.

The script consists of `# @ key = value` directives, the export of
{CFG.launcher.thread_variable} and an invocation of the launcher.

Job fields can be specified on the command line or in a YAML job file
(`--job-file`). Command-line options take precedence over the job file.
The script is printed to standard output unless `--output` is given.

Submit the rendered script using `{CFG.scheduler.submit_command} <script>`.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@optgroup.group(f"{click.style('Input and output', fg='yellow')}")
@optgroup.option(
    "--job-file",
    "-f",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file with a mapping of job fields (e.g., `job_name: sc_openmp`).",
)
@optgroup.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the job script into this file instead of printing it.",
)
@optgroup.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite the output file if it already exists.",
)
@optgroup.group(f"{click.style('Job settings', fg='yellow')}")
@optgroup.option(
    "--job-name", "-n", type=str, default=None, help="Name of the job. Required."
)
@optgroup.option(
    "--comment", type=str, default=None, help="Free-form description of the job."
)
@optgroup.option(
    "--wall-clock-limit",
    "--walltime",
    type=str,
    default=None,
    help="Maximum runtime of the job. Required. Examples: '00:30:00', '30m', '2h', '1d'.",
)
@optgroup.option(
    "--notify-user",
    type=str,
    default=None,
    help="E-mail address notified about the job. Required.",
)
@optgroup.option(
    "--notification",
    type=click.Choice(["always", "error", "start", "never", "complete"]),
    default=None,
    help=f"When to send a notification. Defaults to '{CFG.defaults.notification}'.",
)
@optgroup.option(
    "--job-type",
    type=click.Choice(["bluegene", "serial", "parallel", "mpich"]),
    default=None,
    help=f"LoadLeveler job type. Defaults to '{CFG.defaults.job_type}'.",
)
@optgroup.option(
    "--environment",
    type=str,
    default=None,
    help=f"Environment passed to the job. Defaults to '{CFG.defaults.environment}'.",
)
@optgroup.option(
    "--error",
    type=str,
    default=None,
    help=f"File capturing standard error. Defaults to '{CFG.defaults.error}'.",
)
@optgroup.option(
    "--output-file",
    "output",
    type=str,
    default=None,
    help=f"File capturing standard output. Defaults to '{CFG.defaults.output}'.",
)
@optgroup.group(f"{click.style('Requested resources', fg='yellow')}")
@optgroup.option(
    "--bg-size",
    type=int,
    default=None,
    help=f"Number of Blue Gene nodes to allocate. Defaults to {CFG.defaults.bg_size}. "
    f"Values below {CFG.scheduler.min_bg_size} are raised to {CFG.scheduler.min_bg_size} by the scheduler.",
)
@optgroup.option(
    "--threads",
    "thread_count",
    type=int,
    default=None,
    help=f"Number of OpenMP threads per rank. Defaults to {CFG.defaults.thread_count}.",
)
@optgroup.option(
    "--ranks-per-node",
    type=int,
    default=None,
    help=f"Number of MPI ranks per node. Defaults to {CFG.defaults.ranks_per_node}.",
)
@optgroup.group(f"{click.style('Launch command', fg='yellow')}")
@optgroup.option(
    "--executable",
    "-e",
    type=str,
    default=None,
    help="Path to the executable to launch. Required.",
)
@optgroup.option(
    "--arg",
    "arguments",
    type=str,
    multiple=True,
    help="Argument passed to the executable. Can be repeated.",
)
@optgroup.option(
    "--launcher",
    type=str,
    default=None,
    help=f"Program used to start the executable. Defaults to '{CFG.defaults.launcher}'.",
)
def render(
    job_file: Path | None, output_path: Path | None, force: bool, **kwargs
) -> NoReturn:
    """
    Render a LoadLeveler job script from the command line.
    """
    try:
        spec = JobSpecFactory(job_file, **kwargs).makeJobSpec()
        renderer = Renderer(spec)

        if output_path:
            renderer.write(output_path, overwrite=force)
        else:
            click.echo(renderer.render(), nl=False)
        sys.exit(0)
    except LLJobError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
