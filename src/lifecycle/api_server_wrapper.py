from __future__ import annotations

import asyncio
from typing import Optional

import uvicorn
from fastapi import FastAPI

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    uvicorn serving the overlay API inside the application's event loop

    uvicorn's own signal handlers are disabled so SIGINT/SIGTERM reach the
    ShutdownCoordinator, which then calls stop() through the API server
    shutdown handler. start() returns only after stop().
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000, log_level: str = "info"):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def server(self) -> Optional[uvicorn.Server]:
        return self._server

    @property
    def bound_port(self) -> Optional[int]:
        """Listening port once started (differs from `port` when that is 0)"""
        if self._server is None or not getattr(self._server, "servers", None):
            return None
        sockets = self._server.servers[0].sockets
        return sockets[0].getsockname()[1] if sockets else None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.bound_port or self.port}"

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level=self.log_level,
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore
        return server

    async def _wait_started(self, timeout: float) -> None:
        """Poll uvicorn's started flag; re-raise if serving failed early (port in use)"""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() < deadline and not self._serve_task.done():
            if self._server.started:
                log.info("API server started", url=self.url)
                return
            await asyncio.sleep(0.05)

        if self._serve_task.done() and self._serve_task.exception() is not None:
            raise self._serve_task.exception()
        if not self._serve_task.done():
            log.warn("API server not started yet", timeout=timeout)

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        if self.is_running:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()
        log.info(f"Launching API server on {self.host}:{self.port}")
        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServe")
        await self._wait_started(wait_started_timeout)

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            log.debug("API server task cancelled, stopping server")
            await self.stop()
            raise

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._server is None:
            log.debug("API server not running")
            return

        log.info("Stopping API server...")
        self._server.should_exit = True
        self._server.force_exit = True

        task = self._serve_task
        if task and not task.done():
            try:
                await asyncio.wait_for(asyncio.shield(task), timeout=shutdown_timeout)
            except asyncio.TimeoutError:
                log.warn("API server shutdown timeout; cancelling serve task")
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    log.debug("Uvicorn serve task cancelled")

        self._server = None
        self._serve_task = None
        log.info("API server stopped")
