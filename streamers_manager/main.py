"""Main entry point for the streamers manager.

This module provides the application entry point with:
- Command-line argument parsing
- Startup sequence: bootstrap, asset materialization, configuration load
- Dependency injection into the TUI or the headless mode
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path

import structlog

from streamers_manager import __version__
from streamers_manager.models import BootstrapReport
from streamers_manager.services.assets import ResourceMaterializer, load_bundled_assets
from streamers_manager.services.bootstrap import EnvironmentBootstrapper
from streamers_manager.services.config import ConfigurationService
from streamers_manager.services.errors import AppError, get_error_service, handle_error
from streamers_manager.services.filesystem import FileSystemService
from streamers_manager.services.logging import setup_logging
from streamers_manager.services.supervisor import DEFAULT_INTERPRETER, ProcessSupervisor


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Owns the startup sequence and hands the services to the control surface.
    """

    def __init__(
        self,
        root: Path | None = None,
        interpreter: str = DEFAULT_INTERPRETER,
    ) -> None:
        """Initialize the application context.

        Args:
            root: Working directory holding configs/ and the recorder scripts
            interpreter: Executable used to launch the recorder
        """
        self.root: Path = root or Path.cwd()
        self._filesystem = FileSystemService(self.root)
        self.bootstrapper = EnvironmentBootstrapper(self.root, self._filesystem)
        self.materializer = ResourceMaterializer(self.root, self._filesystem)
        self.config_service = ConfigurationService(base_path=self.root)
        self.supervisor = ProcessSupervisor(interpreter=interpreter, working_directory=self.root)
        self.bootstrap_report: BootstrapReport | None = None

    @property
    def log_file(self) -> Path:
        return self.bootstrapper.log_file

    def initialize(self) -> None:
        """Run the startup sequence.

        Raises:
            FileSystemError: If the working directory or an asset cannot be written,
                or the configuration cannot be read
            ConfigParseError: If the configuration is malformed
        """
        self.bootstrap_report = self.bootstrapper.ensure_environment()
        for failure in self.bootstrap_report.failures:
            log.warning("Default file not created", path=str(failure.path), error=failure.error)

        self.materializer.materialize(load_bundled_assets())
        self.config_service.load_config()
        log.info("Application initialized", root=str(self.root))


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        root: Path | None,
        log_level: str,
        python: str,
        no_tui: bool,
        restart: bool,
    ) -> None:
        self.root: Path | None = root
        self.log_level: str = log_level
        self.python: str = python
        self.no_tui: bool = no_tui
        self.restart: bool = restart


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="streamers-manager",
        description="Manage the streamer list and supervise the recorder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  streamers-manager                       Start the TUI
  streamers-manager --no-tui --restart    Prepare the environment and restart recording
  streamers-manager --python /usr/bin/python3.12
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Working directory for configs/ and the recorder scripts (default: current directory)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)"
    )

    _ = parser.add_argument(
        "--python",
        default=DEFAULT_INTERPRETER,
        help=f"Interpreter used to launch the recorder (default: {DEFAULT_INTERPRETER})"
    )

    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="Run without the TUI"
    )

    _ = parser.add_argument(
        "--restart",
        action="store_true",
        help="With --no-tui, restart the recorder once"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        root=ns.root,
        log_level=ns.log_level,
        python=ns.python,
        no_tui=bool(ns.no_tui),
        restart=bool(ns.restart),
    )


def setup_signal_handlers() -> None:
    """Treat SIGTERM like Ctrl+C so shutdown goes through the same path."""
    def signal_handler(signum: int, frame: object) -> None:
        _ = frame
        log.info("Received signal", signal=signal.Signals(signum).name)
        raise KeyboardInterrupt

    _ = signal.signal(signal.SIGTERM, signal_handler)
    log.debug("Signal handlers registered")


async def run_tui(context: ApplicationContext) -> int:
    """Run the TUI application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from streamers_manager.ui.app import StreamersManagerApp

    log.info("Starting TUI application")
    app = StreamersManagerApp(
        config_service=context.config_service,
        supervisor=context.supervisor,
    )
    await app.run_async()
    log.info("TUI application exited normally")
    return 0


def run_headless(context: ApplicationContext, restart: bool) -> int:
    """Print a summary and optionally restart the recorder."""
    config = context.config_service.config
    print(f"Configuration: {context.config_service.config_path}")
    print(f"Streamers ({len(config.streamers)}): {', '.join(config.streamers) or '-'}")
    print(f"Export location: {config.default_export_location}")

    if restart:
        launched = context.supervisor.restart()
        print("Recorder restarted" if launched else "Recorder already active")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # No log file until bootstrap has created configs/
    _ = setup_logging(log_level=args.log_level, tui_mode=not args.no_tui)
    context = ApplicationContext(root=args.root, interpreter=args.python)
    setup_signal_handlers()

    try:
        context.initialize()
        _ = setup_logging(
            log_level=args.log_level,
            log_file=context.log_file,
            tui_mode=not args.no_tui,
            # The detached recorder appends to the same file; rotating would strand it
            max_bytes=0,
        )
        log.info("Starting streamers manager", version=__version__, root=str(context.root))

        if args.no_tui:
            exit_code = run_headless(context, args.restart)
        else:
            exit_code = asyncio.run(run_tui(context))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    except AppError as e:
        user_error = handle_error(e, operation="startup", component="main")
        print(get_error_service().create_user_message(user_error), file=sys.stderr)
        exit_code = 1

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
