"""
HTTP listener for the command bridge.

A small Starlette application served by uvicorn. Request bodies are handed
to the Dispatcher in Starlette's worker thread pool, so a request waiting on
the host thread never blocks the event loop or other connections.

Routes:
    POST /api/command       one request document in, one response document out
    GET|POST /api/status    bridge status (name, version, capabilities, ...)
    GET /api/commands       registered command descriptors

Command responses always use HTTP 200; success or failure travels inside
the response document.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

import uvicorn
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from ..core.constants import DEFAULT_HOST, DEFAULT_PORT, ROUTE_COMMAND, ROUTE_COMMANDS, ROUTE_STATUS
from ..dispatcher import Dispatcher

logger = logging.getLogger(__name__)

StatusProvider = Callable[[], dict[str, Any]]


def create_app(dispatcher: Dispatcher, status_provider: Optional[StatusProvider] = None) -> Starlette:
    """
    Build the Starlette application for a dispatcher.

    Args:
        dispatcher: Dispatcher handling command documents
        status_provider: Callable returning the status payload

    Returns:
        Starlette application
    """

    async def command(request: Request) -> Response:
        body = await request.body()
        response = await run_in_threadpool(dispatcher.handle, body)
        return Response(response, media_type="application/json")

    async def status(request: Request) -> Response:
        payload = status_provider() if status_provider else {}
        return JSONResponse(payload)

    async def commands(request: Request) -> Response:
        domain = request.query_params.get("domain")
        return JSONResponse(
            {"commands": [d.describe() for d in dispatcher.registry.descriptors(domain)]}
        )

    routes = [
        Route(ROUTE_COMMAND, command, methods=["POST"]),
        Route(ROUTE_STATUS, status, methods=["GET", "POST"]),
        Route(ROUTE_COMMANDS, commands, methods=["GET"]),
    ]
    return Starlette(routes=routes)


class BridgeServer:
    """
    uvicorn server for the bridge application.

    ``serve()`` blocks the calling thread; ``start()`` runs the server on a
    background thread so the caller (the editor) stays responsive.
    """

    STARTUP_TIMEOUT = 10.0
    JOIN_TIMEOUT = 5.0

    def __init__(
        self,
        app: Starlette,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        log_level: str = "warning",
    ):
        self.host = host
        self.port = port
        self._config = uvicorn.Config(
            app,
            host=host,
            port=port,
            log_level=log_level.lower(),
            # Logging is configured by the bridge, not by uvicorn
            log_config=None,
        )
        self._server = uvicorn.Server(self._config)
        self._thread: Optional[threading.Thread] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def serve(self) -> None:
        """Serve in the foreground until interrupted."""
        logger.info(f"Bridge listening on {self.url}")
        self._server.run()

    def start(self) -> None:
        """
        Serve on a background thread and wait until the socket is bound.

        Raises:
            RuntimeError: If the server fails to start (e.g. port in use)
        """
        if self.running:
            return

        self._server.should_exit = False
        self._thread = threading.Thread(
            target=self._server.run, name="mcp-unreal-http", daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + self.STARTUP_TIMEOUT
        while not self._server.started and self._thread.is_alive():
            if time.monotonic() > deadline:
                self._server.should_exit = True
                break
            time.sleep(0.05)

        if not self._server.started:
            self._thread.join(self.JOIN_TIMEOUT)
            self._thread = None
            raise RuntimeError(f"Bridge HTTP server failed to start on {self.url}")

        logger.info(f"Bridge listening on {self.url}")

    def stop(self) -> None:
        """Ask the server to exit and wait for its thread."""
        if self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(self.JOIN_TIMEOUT)
        if self._thread.is_alive():
            logger.warning("Bridge HTTP server did not stop in time")
        self._thread = None
        logger.info("Bridge HTTP server stopped")
