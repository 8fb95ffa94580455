"""Tests for the recorder process supervisor."""

import subprocess
import sys
import threading
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from streamers_manager.models import RecordingState
from streamers_manager.services import LaunchError, ProcessSupervisor


@pytest.fixture
def supervisor(tmp_path: Path) -> ProcessSupervisor:
    return ProcessSupervisor(interpreter=sys.executable, working_directory=tmp_path)


def test_initial_state_is_idle(supervisor: ProcessSupervisor) -> None:
    assert supervisor.state is RecordingState.IDLE
    assert not supervisor.is_active
    assert supervisor.last_launch is None


def test_successful_launch_marks_running(supervisor: ProcessSupervisor, tmp_path: Path) -> None:
    launched = supervisor.start(sys.executable, ["-c", "open('launched', 'w').close()"])

    assert launched
    assert supervisor.state is RecordingState.RUNNING
    assert supervisor.is_active
    # The child runs in the working directory
    assert (tmp_path / "launched").exists()
    assert supervisor.last_launch is not None
    assert supervisor.last_launch.command == [sys.executable, "-c", "open('launched', 'w').close()"]
    assert supervisor.last_launch.return_code == 0


def test_start_while_running_is_a_no_op(supervisor: ProcessSupervisor) -> None:
    supervisor.start(sys.executable, ["-c", "pass"])

    with patch("streamers_manager.services.supervisor.subprocess.run") as mock_run:
        assert supervisor.start(sys.executable, ["-c", "pass"]) is False
        assert supervisor.restart() is False
        mock_run.assert_not_called()

    assert supervisor.state is RecordingState.RUNNING


def test_child_output_is_discarded(supervisor: ProcessSupervisor, capfd: pytest.CaptureFixture[str]) -> None:
    """The recorder must not write onto the terminal the TUI is drawing."""
    supervisor.start(sys.executable, ["-c", "import sys; print('CHILD' + '-OUT'); print('CHILD' + '-ERR', file=sys.stderr)"])

    out, err = capfd.readouterr()
    # Built at runtime so the logged command line cannot match
    assert "CHILD-OUT" not in out
    assert "CHILD-ERR" not in err


def test_missing_interpreter_raises_and_allows_retry(supervisor: ProcessSupervisor, tmp_path: Path) -> None:
    missing = str(tmp_path / "no-such-interpreter")

    with pytest.raises(LaunchError) as exc_info:
        supervisor.start(missing, ["Recordurbate.py", "restart"])

    assert exc_info.value.message == f"Could not start {missing}"
    assert exc_info.value.return_code is None
    assert isinstance(exc_info.value.original_error, FileNotFoundError)
    assert supervisor.state is RecordingState.IDLE

    assert supervisor.start(sys.executable, ["-c", "pass"]) is True
    assert supervisor.state is RecordingState.RUNNING


def test_non_zero_exit_raises(supervisor: ProcessSupervisor) -> None:
    with pytest.raises(LaunchError) as exc_info:
        supervisor.start(sys.executable, ["-c", "raise SystemExit(3)"])

    assert exc_info.value.message == "Recorder exited with status 3"
    assert exc_info.value.return_code == 3
    assert supervisor.state is RecordingState.IDLE
    assert supervisor.last_launch is None


def test_restart_runs_entry_point(tmp_path: Path) -> None:
    supervisor = ProcessSupervisor(interpreter="python3", working_directory=tmp_path)

    with patch("streamers_manager.services.supervisor.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        assert supervisor.restart() is True

    mock_run.assert_called_once_with(
        ["python3", "Recordurbate.py", "restart"],
        cwd=tmp_path,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=True,
    )


def test_concurrent_starts_launch_once(supervisor: ProcessSupervisor) -> None:
    release = threading.Event()
    entered = threading.Event()
    calls: list[list[str]] = []

    def slow_run(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        calls.append(argv)
        entered.set()
        release.wait(timeout=5)
        return subprocess.CompletedProcess(args=argv, returncode=0)

    results: list[bool] = []

    with patch("streamers_manager.services.supervisor.subprocess.run", side_effect=slow_run):
        first = threading.Thread(target=lambda: results.append(supervisor.restart()))
        first.start()
        assert entered.wait(timeout=5)

        assert supervisor.state is RecordingState.STARTING
        others = [threading.Thread(target=lambda: results.append(supervisor.restart())) for _ in range(5)]
        for thread in others:
            thread.start()
        for thread in others:
            thread.join(timeout=5)

        release.set()
        first.join(timeout=5)

    assert len(calls) == 1
    assert sorted(results) == [False] * 5 + [True]
    assert supervisor.state is RecordingState.RUNNING


def test_notify_stopped_returns_to_idle(supervisor: ProcessSupervisor) -> None:
    supervisor.notify_stopped()
    assert supervisor.state is RecordingState.IDLE

    supervisor.start(sys.executable, ["-c", "pass"])
    supervisor.notify_stopped()

    assert supervisor.state is RecordingState.IDLE
    assert supervisor.start(sys.executable, ["-c", "pass"]) is True


def test_stop_is_not_supported(supervisor: ProcessSupervisor) -> None:
    with pytest.raises(NotImplementedError):
        supervisor.stop()


@pytest.mark.asyncio
async def test_start_async(supervisor: ProcessSupervisor) -> None:
    assert await supervisor.start_async(sys.executable, ["-c", "pass"]) is True
    assert supervisor.state is RecordingState.RUNNING
    assert await supervisor.start_async(sys.executable, ["-c", "pass"]) is False


@pytest.mark.asyncio
async def test_restart_async_failure(tmp_path: Path) -> None:
    supervisor = ProcessSupervisor(interpreter=str(tmp_path / "missing"), working_directory=tmp_path)

    with pytest.raises(LaunchError):
        await supervisor.restart_async()

    assert supervisor.state is RecordingState.IDLE
