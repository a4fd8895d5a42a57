# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import patch

import pytest

from lljob_lib.core.error import LLJobConfigError, LLJobError
from lljob_lib.job.spec import JobSpec
from lljob_lib.properties.job_type import JobType
from lljob_lib.properties.notification import Notification
from lljob_lib.render.renderer import Renderer

EXPECTED_SCRIPT = """\
# This job script can be submitted to LoadLeveler via
# llsubmit [script]
#
# Notice that bg_size=32 is the smallest possible number of nodes.
# Any smaller input is automatically set to 32.
#
# Do not forget to put your email address in the
# notify_user field.
#
# This script has to be submitted from within the folder
# of the executable.

# @ job_name = sc_openmp
# @ comment = "Example libsc with openmp"
# @ error = $(job_name).$(jobid).out
# @ output = $(job_name).$(jobid).out
# @ environment = COPY_ALL
# @ wall_clock_limit = 00:30:00
# @ notification = error
# @ notify_user = yourname@yourserver.com
# @ job_type = bluegene
# @ bg_size = 32
# @ queue

export OMP_NUM_THREADS=4

runjob --ranks-per-node 16 --exp-env OMP_NUM_THREADS : ./sc_openmp
"""


@pytest.fixture
def spec():
    return JobSpec(
        job_name="sc_openmp",
        wall_clock_limit="00:30:00",
        notify_user="a@b.com",
        executable="./sc_openmp",
        bg_size=32,
        thread_count=4,
    )


def test_renderer_render_full_script():
    spec = JobSpec(
        job_name="sc_openmp",
        comment="Example libsc with openmp",
        wall_clock_limit="00:30:00",
        notify_user="yourname@yourserver.com",
        executable="./sc_openmp",
    )

    assert Renderer(spec).render() == EXPECTED_SCRIPT


def test_renderer_render_contains_export_and_launch_line(spec):
    lines = Renderer(spec).render().splitlines()

    assert "export OMP_NUM_THREADS=4" in lines
    launch = [line for line in lines if line.startswith("runjob")]
    assert len(launch) == 1
    assert launch[0].endswith(": ./sc_openmp")


def test_renderer_render_is_deterministic(spec):
    first = Renderer(spec).render()
    second = Renderer(spec).render()
    third = Renderer(JobSpec.fromDict(spec.toDict())).render()

    assert first == second == third


def test_renderer_render_omits_comment_when_not_set(spec):
    assert "# @ comment" not in Renderer(spec).render()


def test_renderer_render_directive_order(spec):
    directives = [
        line.split("=")[0].removeprefix("# @ ").strip()
        for line in Renderer(spec).render().splitlines()
        if line.startswith("# @ ")
    ]

    assert directives == [
        "job_name",
        "error",
        "output",
        "environment",
        "wall_clock_limit",
        "notification",
        "notify_user",
        "job_type",
        "bg_size",
        "queue",
    ]


def test_renderer_render_custom_values(spec):
    spec.notification = Notification.COMPLETE
    spec.job_type = JobType.PARALLEL
    spec.bg_size = 512
    spec.thread_count = 64
    spec.ranks_per_node = 1
    spec.launcher = "srun"
    spec.arguments = ["--input", "my file.dat"]

    text = Renderer(spec).render()

    assert "# @ notification = complete\n" in text
    assert "# @ job_type = parallel\n" in text
    assert "# @ bg_size = 512\n" in text
    assert "export OMP_NUM_THREADS=64\n" in text
    assert text.endswith(
        "srun --ranks-per-node 1 --exp-env OMP_NUM_THREADS : ./sc_openmp --input 'my file.dat'\n"
    )


def test_renderer_render_passes_small_bg_size_through_and_warns(spec):
    spec.bg_size = 8

    with patch("lljob_lib.render.renderer.logger") as mock_logger:
        text = Renderer(spec).render()

    assert "# @ bg_size = 8\n" in text
    assert spec.bg_size == 8
    mock_logger.warning.assert_called_once()
    assert "below the scheduler minimum" in mock_logger.warning.call_args[0][0]


def test_renderer_render_does_not_warn_for_minimum_bg_size(spec):
    with patch("lljob_lib.render.renderer.logger") as mock_logger:
        Renderer(spec).render()

    mock_logger.warning.assert_not_called()


def test_renderer_render_missing_notify_user_raises(spec):
    spec.notify_user = None

    with pytest.raises(LLJobConfigError, match="notify_user"):
        Renderer(spec).render()


def test_renderer_render_non_positive_bg_size_raises(spec):
    spec.bg_size = 0

    with pytest.raises(LLJobConfigError, match="bg_size"):
        Renderer(spec).render()


def test_renderer_write_creates_file(tmp_path, spec):
    path = tmp_path / "job.ll"
    Renderer(spec).write(path)

    assert path.read_text(encoding="utf-8") == Renderer(spec).render()


def test_renderer_write_existing_file_raises(tmp_path, spec):
    path = tmp_path / "job.ll"
    path.write_text("original")

    with pytest.raises(LLJobError, match="already exists"):
        Renderer(spec).write(path)

    assert path.read_text() == "original"


def test_renderer_write_existing_file_overwrite(tmp_path, spec):
    path = tmp_path / "job.ll"
    path.write_text("original")

    Renderer(spec).write(path, overwrite=True)

    assert path.read_text(encoding="utf-8").startswith("# This job script")


def test_renderer_write_invalid_spec_creates_no_file(tmp_path, spec):
    spec.notify_user = None
    path = tmp_path / "job.ll"

    with pytest.raises(LLJobConfigError):
        Renderer(spec).write(path)

    assert not path.exists()


def test_renderer_write_unwritable_path_raises(tmp_path, spec):
    path = tmp_path / "missing_dir" / "job.ll"

    with pytest.raises(LLJobError, match="Could not write job script"):
        Renderer(spec).write(path)
