from __future__ import annotations
import asyncio
import uvicorn
from typing import Any, Optional
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs Uvicorn inside an asyncio task without Uvicorn's signal handlers
    interfering with the shutdown pipeline.

    Behaviour:
      - start() launches uvicorn.Server.serve() as a background task and awaits
        an internal stop event. start() returns only after stop() was called.
      - stop() sets the stop event, shuts the server down (force_exit) and
        cancels the serve task if it lingers.
    """

    def __init__(self, app: Any, host: str = "0.0.0.0", port: int = 8000):
        """
        Args:
            app: ASGI app (FastAPI, or the Socket.IO ASGIApp wrapping it)
        """
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        """Create a uvicorn.Server with its own signal handlers disabled"""
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="warning",
            access_log=False,
            server_header=False,
        )

        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore

        return server

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        """
        Start uvicorn in background and block until stop() is called.

        Schedule with create_tracked_task(..., category=TaskCategory.API).
        """
        if self._serve_task is not None and not self._serve_task.done():
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info(f"Launching API server on http://{self.host}:{self.port}")
        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServeInternal")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + wait_started_timeout
        while loop.time() < deadline:
            if getattr(self._server, "started", False):
                log.info("API server started")
                break
            if self._serve_task.done():
                # Bind failure etc.: surface it so the task registry records it
                self._serve_task.result()
                raise RuntimeError("API server exited during startup")
            await asyncio.sleep(0.05)

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            log.debug("start() cancelled externally, invoking stop()")
            await self.stop()
            raise

        log.debug("APIServerWrapper.start() exiting")

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        """Stop the API server and release the port"""
        self._stop_event.set()

        if self._server is None:
            log.debug("API server stop() called but server was not running")
            return

        log.info("Stopping API server...")
        self._server.should_exit = True
        self._server.force_exit = True

        if self._serve_task and not self._serve_task.done():
            try:
                await asyncio.wait_for(asyncio.shield(self._serve_task), timeout=shutdown_timeout)
            except asyncio.TimeoutError:
                log.warn("API server shutdown timeout; cancelling serve task")
                self._serve_task.cancel()
                try:
                    await self._serve_task
                except asyncio.CancelledError:
                    log.debug("Uvicorn serve task cancelled")

        self._server = None
        self._serve_task = None
        log.info("API server stopped")

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def server(self) -> Optional[uvicorn.Server]:
        return self._server
