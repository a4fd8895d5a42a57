# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from typing import Any

import yaml

from lljob_lib.core.common import load_yaml_loader, to_snake_case
from lljob_lib.core.error import LLJobConfigError
from lljob_lib.core.logger import get_logger
from lljob_lib.job.spec import JobSpec

logger = get_logger(__name__)


class JobSpecFactory:
    """
    Factory class to construct a JobSpec based on options from the command line
    and from a YAML job file.
    """

    def __init__(self, job_file: Path | None = None, **kwargs):
        """
        Initialize the factory.

        Args:
            job_file (Path | None): Optional YAML file with a mapping of job fields.
            **kwargs: Job fields specified on the command line. None values
                and empty sequences count as not specified.
        """
        self._job_file = job_file
        self._kwargs = kwargs

    def makeJobSpec(self) -> JobSpec:
        """
        Construct the job description.

        Priority:
            1. Command-line specification
            2. Value from the job file
            3. Configured default

        Returns:
            JobSpec: The merged job description. It is not validated.

        Raises:
            LLJobConfigError: If the job file cannot be loaded or if any value
                cannot be converted.
        """
        data = self._loadJobFile() if self._job_file else {}

        for key, value in self._kwargs.items():
            if value is None or (isinstance(value, (tuple, list)) and not value):
                continue
            if isinstance(value, tuple):
                value = list(value)
            logger.debug(f"Option '{key}' from the command line overrides the job file.")
            data[key] = value

        return JobSpec.fromDict(data)

    def _loadJobFile(self) -> dict[str, Any]:
        """
        Load the mapping of job fields from the YAML job file.
        """
        assert self._job_file is not None

        if not self._job_file.is_file():
            raise LLJobConfigError(
                f"Job file '{self._job_file}' does not exist or is not a file."
            )

        try:
            with self._job_file.open(encoding="utf-8") as f:
                data = yaml.load(f, Loader=load_yaml_loader())
        except (OSError, yaml.YAMLError) as e:
            raise LLJobConfigError(
                f"Could not read job file '{self._job_file}': {e}."
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise LLJobConfigError(
                f"Job file '{self._job_file}' must contain a mapping of job fields."
            )

        # allow kebab-case and PascalCase keys in the job file
        data = {to_snake_case(str(k)): v for k, v in data.items()}
        logger.debug(f"Loaded job file '{self._job_file}': {data}.")
        return data
