"""Process supervisor for the external recorder."""

import asyncio
import subprocess
import threading
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import structlog

from ..models import LaunchRecord, RecordingState
from .assets import ENTRY_POINT_ASSET
from .errors import LaunchError

log = structlog.stdlib.get_logger()

DEFAULT_INTERPRETER = "python3"
RESTART_COMMAND = "restart"


class ProcessSupervisor:
    """Launches the recorder and enforces a single active instance.

    State transitions::

        IDLE -> STARTING -> RUNNING -> IDLE (notify_stopped)
                    \\-> IDLE (launch failed)

    The lock is held only while checking and changing the state, never while
    the child runs, so concurrent callers see STARTING and return at once.
    """

    def __init__(
        self,
        interpreter: str = DEFAULT_INTERPRETER,
        entry_point: str = ENTRY_POINT_ASSET,
        working_directory: Path | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            interpreter: Executable used to run the recorder entry point
            entry_point: Name of the materialized entry point script
            working_directory: Directory the recorder is launched from
        """
        self.interpreter = interpreter
        self.entry_point = entry_point
        self.working_directory: Path = working_directory or Path.cwd()
        self._state = RecordingState.IDLE
        self._last_launch: LaunchRecord | None = None
        self._lock = threading.Lock()
        log.info(
            "Process supervisor initialized",
            interpreter=interpreter,
            entry_point=entry_point,
            working_directory=str(self.working_directory),
        )

    @property
    def state(self) -> RecordingState:
        with self._lock:
            return self._state

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def last_launch(self) -> LaunchRecord | None:
        """Handle of the last successful launch, if any."""
        with self._lock:
            return self._last_launch

    def start(self, command: str, args: Sequence[str] = ()) -> bool:
        """Run ``command`` with ``args`` unless a launch is already active.

        Returns:
            True if the command was launched, False if this call was a no-op

        Raises:
            LaunchError: If the command cannot be spawned or exits non-zero
        """
        with self._lock:
            if self._state is not RecordingState.IDLE:
                log.debug("Recording already active, ignoring start", state=self._state.value)
                return False
            self._state = RecordingState.STARTING

        argv = [command, *args]
        log.info("Launching recorder", command=argv)
        try:
            # Output would draw over the TUI
            completed = subprocess.run(
                argv,
                cwd=self.working_directory,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            with self._lock:
                self._state = RecordingState.IDLE
            return_code = e.returncode if isinstance(e, subprocess.CalledProcessError) else None
            log.error("Recorder launch failed", command=argv, return_code=return_code, error=str(e))
            if return_code is not None:
                message = f"Recorder exited with status {return_code}"
            else:
                message = f"Could not start {command}"
            raise LaunchError(message, command=argv, return_code=return_code, original_error=e) from e

        with self._lock:
            self._state = RecordingState.RUNNING
            self._last_launch = LaunchRecord(
                command=argv,
                return_code=completed.returncode,
                launched_at=datetime.now(),
            )
        log.info("Recorder launched", command=argv)
        return True

    def restart(self) -> bool:
        """Restart the recorder through its entry point."""
        return self.start(self.interpreter, [self.entry_point, RESTART_COMMAND])

    async def start_async(self, command: str, args: Sequence[str] = ()) -> bool:
        """Run :meth:`start` in a worker thread."""
        return await asyncio.to_thread(self.start, command, list(args))

    async def restart_async(self) -> bool:
        """Run :meth:`restart` in a worker thread."""
        return await asyncio.to_thread(self.restart)

    def notify_stopped(self) -> None:
        """Record that the recorder is no longer running."""
        with self._lock:
            if self._state is RecordingState.RUNNING:
                self._state = RecordingState.IDLE
                log.info("Recorder reported stopped")
            else:
                log.debug("Stop notification ignored", state=self._state.value)

    def stop(self) -> None:
        """Stop the recorder.

        The recorder is detached once launched and there is no handle to
        signal it through.
        """
        raise NotImplementedError("Stopping the recorder is not supported")
