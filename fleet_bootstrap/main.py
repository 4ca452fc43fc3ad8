"""Main module entrypoint for local runtime execution.

This module validates startup configuration, starts the status endpoint and
runs the bootstrap workflow alongside it.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal

import uvicorn

from fleet_bootstrap.adapters import ToolDetector
from fleet_bootstrap.bootstrap import BootstrapRuntime, bootstrap_create_runtime
from fleet_bootstrap.config import config_load_settings

logger = logging.getLogger(__name__)

_LISTEN_POLL_SECONDS = 0.05


class GracefulExitServer(uvicorn.Server):
    """Uvicorn server that turns termination signals into a clean exit.

    The captured signal is not re-raised after shutdown, so SIGTERM and
    SIGINT end the process with status 0.
    """

    def handle_exit(self, sig: int, frame) -> None:
        if self.should_exit and sig == signal.SIGINT:
            self.force_exit = True
        else:
            self.should_exit = True


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with the process exit status.
    """

    argument_parser = argparse.ArgumentParser(description="Fleet bootstrap runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="run",
        choices=("run", "serve", "detect-tools"),
        help="Runtime command: `run` serves status and bootstraps services, `serve` only serves status, "
        "`detect-tools` lists available transfer tools",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if parsed_arguments.command == "detect-tools":
        tools = asyncio.run(ToolDetector().adapter_detect_tools())
        for tool in tools:
            print(tool.value)
        raise SystemExit(0 if tools else 1)

    runtime = bootstrap_create_runtime(settings)
    exit_code = asyncio.run(
        main_serve(
            runtime=runtime,
            host=settings.application_host,
            port=settings.application_port,
            run_bootstrap=parsed_arguments.command == "run",
        )
    )
    raise SystemExit(exit_code)


async def main_serve(runtime: BootstrapRuntime, host: str, port: int, run_bootstrap: bool) -> int:
    """Serve the status endpoint and optionally run the bootstrap workflow.

    The server is listening before the workflow starts. A failed workflow
    stops the server and yields exit status 1.

    Args:
        runtime: Wired runtime components.
        host: Interface to bind.
        port: Port to bind, 0 for an ephemeral port.
        run_bootstrap: Whether to run the bootstrap workflow.

    Returns:
        int: Process exit status.

    Raises:
        RuntimeError: This coroutine does not raise runtime errors.
    """

    server = GracefulExitServer(
        uvicorn.Config(
            runtime.application,
            host=host,
            port=port,
            log_config=None,
            access_log=False,
        )
    )
    serve_task = asyncio.create_task(server.serve())
    if not await main_wait_until_listening(server=server, serve_task=serve_task):
        logger.error("status endpoint failed to start on port %s", port)
        return 1

    exit_code = 0
    if run_bootstrap:
        bootstrap_task = asyncio.create_task(runtime.orchestrator.job_execute(job_name="bootstrap_run"))
        await asyncio.wait({serve_task, bootstrap_task}, return_when=asyncio.FIRST_COMPLETED)
        if bootstrap_task.done():
            exit_code = main_resolve_bootstrap_exit_code(bootstrap_task)
            if exit_code != 0:
                server.should_exit = True
        else:
            bootstrap_task.cancel()
            await asyncio.gather(bootstrap_task, return_exceptions=True)

    await serve_task
    await runtime.cleanup_timer.timer_cancel()
    return exit_code


async def main_wait_until_listening(server: uvicorn.Server, serve_task: asyncio.Task) -> bool:
    """Wait until the server accepts connections or its task ends.

    Args:
        server: Uvicorn server being started.
        serve_task: Task running `server.serve()`.

    Returns:
        bool: True once listening, False when serving ended first.

    Raises:
        RuntimeError: This coroutine does not raise runtime errors.
    """

    while not server.started:
        if serve_task.done():
            return False
        await asyncio.sleep(_LISTEN_POLL_SECONDS)
    return True


def main_resolve_bootstrap_exit_code(bootstrap_task: asyncio.Task) -> int:
    """Map a finished bootstrap task to a process exit status.

    Args:
        bootstrap_task: Completed bootstrap workflow task.

    Returns:
        int: 0 on success, 1 on failure or unexpected error.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if bootstrap_task.cancelled():
        return 1
    unexpected_error = bootstrap_task.exception()
    if unexpected_error is not None:
        logger.error("bootstrap crashed", exc_info=unexpected_error)
        return 1
    return 0 if bootstrap_task.result().status == "success" else 1


if __name__ == "__main__":
    main()
