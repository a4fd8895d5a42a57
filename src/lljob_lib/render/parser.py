# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
import shlex
from pathlib import Path
from typing import Self

from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobError
from lljob_lib.core.logger import get_logger
from lljob_lib.job.spec import JobSpec

logger = get_logger(__name__)


class Parser:
    """
    Extractor of job information from the text of a LoadLeveler job script.
    """

    # directive keywords mapped to JobSpec fields
    KNOWN_DIRECTIVES = (
        "job_name",
        "comment",
        "error",
        "output",
        "environment",
        "wall_clock_limit",
        "notification",
        "notify_user",
        "job_type",
        "bg_size",
    )

    def __init__(self, text: str, source: str = "<string>"):
        """
        Initialize the parser.

        Args:
            text (str): Content of the job script.
            source (str): Name of the script used in error messages.
        """
        self._text = text
        self._source = source
        self._options: dict[str, object] = {}

    @classmethod
    def fromFile(cls, script: Path) -> Self:
        """
        Create a parser for a job script stored in a file.

        Raises:
            LLJobError: If the file cannot be read.
        """
        if not script.is_file():
            raise LLJobError(f"Could not open '{script}' as a file.")

        try:
            text = script.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LLJobError(f"Could not read job script '{script}': {e}.") from e

        return cls(text, str(script))

    def parse(self) -> JobSpec:
        """
        Extract the job description from the script.

        Directive lines (`# @ key = value`) are read until the `# @ queue`
        terminator. After that, the export of the OpenMP thread count and the
        launch command are extracted. Plain comments, empty lines and other
        shell commands are skipped.

        Returns:
            JobSpec: The extracted job description. It is not validated.

        Raises:
            LLJobError: If a directive is malformed or unknown, if the directive
                block is not terminated, or if the launch command is missing.
        """
        self._options = {}
        queued = False
        launch_found = False

        for number, line in enumerate(self._text.splitlines(), start=1):
            stripped = line.strip()
            if stripped == "":
                continue

            if directive := Parser._matchDirective(stripped):
                key, value = directive
                if queued:
                    raise LLJobError(
                        f"Directive '{key}' found after '{CFG.directives.terminator}' in '{self._source}' (line {number}). Multiple job steps are not supported."
                    )
                if key == CFG.directives.terminator and value is None:
                    logger.debug(f"Parser: end of directive block at line {number}.")
                    queued = True
                    continue
                self._storeDirective(key, value, number)
                continue

            if stripped.startswith("#"):
                logger.debug(f"Parser: skipping commented line '{stripped}'.")
                continue

            if not queued:
                raise LLJobError(
                    f"Shell command found before '{CFG.directives.prefix}{CFG.directives.terminator}' in '{self._source}' (line {number}): {stripped}"
                )

            if (thread_count := Parser._matchExport(stripped)) is not None:
                self._options["thread_count"] = thread_count
                continue

            if (tokens := Parser._splitLaunchCommand(stripped)) is not None:
                if launch_found:
                    raise LLJobError(
                        f"Multiple launch commands found in '{self._source}' (line {number})."
                    )
                self._options.update(self._parseLaunchCommand(tokens, number))
                launch_found = True
                continue

            logger.debug(f"Parser: skipping shell line '{stripped}'.")

        if not queued:
            raise LLJobError(
                f"Missing '{CFG.directives.prefix}{CFG.directives.terminator}' directive in '{self._source}'."
            )
        if not launch_found:
            raise LLJobError(f"Missing launch command in '{self._source}'.")

        logger.debug(f"Parsed options from '{self._source}': {self._options}.")
        return JobSpec.fromDict(self._options)

    def _storeDirective(self, key: str, value: str | None, number: int) -> None:
        if key not in Parser.KNOWN_DIRECTIVES:
            raise LLJobError(
                f"Unknown directive '{key}' in '{self._source}' (line {number}).\nKnown directives are '{' '.join(Parser.KNOWN_DIRECTIVES)}'."
            )
        if value is None:
            raise LLJobError(
                f"Directive '{key}' has no value in '{self._source}' (line {number})."
            )

        if key == "comment" and len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]

        if key in self._options:
            logger.warning(
                f"Directive '{key}' specified multiple times in '{self._source}'. Using the last value."
            )
        self._options[key] = value

    def _parseLaunchCommand(self, tokens: list[str], number: int) -> dict[str, object]:
        """
        Split the launch command into the launcher, ranks per node, executable and its arguments.
        """
        separator = tokens.index(CFG.launcher.separator, 1)
        launcher_part, program_part = tokens[:separator], tokens[separator + 1 :]
        if not program_part:
            raise LLJobError(
                f"Launch command without an executable in '{self._source}' (line {number})."
            )

        options: dict[str, object] = {
            "launcher": launcher_part[0],
            "executable": program_part[0],
            "arguments": program_part[1:],
        }

        flags = launcher_part[1:]
        if CFG.launcher.ranks_flag in flags:
            index = flags.index(CFG.launcher.ranks_flag)
            if index + 1 >= len(flags):
                raise LLJobError(
                    f"Missing value for '{CFG.launcher.ranks_flag}' in '{self._source}' (line {number})."
                )
            options["ranks_per_node"] = flags[index + 1]

        return options

    @staticmethod
    def _matchDirective(line: str) -> tuple[str, str | None] | None:
        """
        Match a `# @ key = value` directive line.

        Returns:
            tuple[str, str | None] | None: The key and the value (None for keyword-only
            directives such as `queue`), or None if the line is not a directive.
        """
        match = re.fullmatch(r"#\s*@\s*(\w+)\s*(?:=\s*(.*?))?\s*", line)
        if not match:
            return None
        return match.group(1).lower(), match.group(2)

    @staticmethod
    def _matchExport(line: str) -> str | None:
        match = re.fullmatch(
            rf"export\s+{re.escape(CFG.launcher.thread_variable)}=(\S+)", line
        )
        return match.group(1) if match else None

    @staticmethod
    def _splitLaunchCommand(line: str) -> list[str] | None:
        """
        Split a shell line into tokens if it is a launch command.

        A launch command has the separator as a standalone token preceded by
        at least the launcher. Lines that cannot be tokenized are not launch commands.
        """
        try:
            tokens = shlex.split(line)
        except ValueError:
            return None

        if CFG.launcher.separator not in tokens[1:]:
            return None
        return tokens
