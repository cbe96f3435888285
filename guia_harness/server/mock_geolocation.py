"""
Mock network geolocation service for Firefox.

Firefox resolves ``navigator.geolocation`` through the endpoint configured
in ``geo.provider.network.url``. This server answers every request with a
fixed Mozilla Location Service (MLS) compatible payload.
"""
import threading
import time
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from guia_harness.config_manager import MockServerConfig
from guia_harness.utils.logger import get_logger

logger = get_logger("mock_server")


def geolocation_payload(config: MockServerConfig) -> Dict[str, Any]:
    """MLS-compatible response body."""
    return {
        "location": {
            "lat": config.latitude,
            "lng": config.longitude,
        },
        "accuracy": config.accuracy,
    }


def create_app(config: Optional[MockServerConfig] = None) -> FastAPI:
    """
    Build the mock geolocation application.

    Every path answers GET and POST with the configured coordinates.
    """
    config = config or MockServerConfig()
    app = FastAPI(title="Mock Geolocation Service")

    @app.api_route("/{path:path}", methods=["GET", "POST"])
    async def locate(request: Request, path: str):
        if request.method == "POST":
            body = await request.body()
            if body:
                logger.debug(f"Received POST /{path}: {body.decode('utf-8', errors='ignore')}")

        payload = geolocation_payload(config)
        logger.debug(f"{request.method} /{path} -> {payload}")
        return JSONResponse(
            content=payload,
            headers={"Access-Control-Allow-Origin": "*"},
        )

    return app


class MockGeolocationServer:
    """
    Run the mock geolocation application in a background thread.

    Example:
        >>> with MockGeolocationServer() as server:
        ...     driver = create_firefox_driver(geolocation_url=server.url)
    """

    def __init__(self, config: Optional[MockServerConfig] = None):
        self.config = config or MockServerConfig()
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        """Bound port, resolved after start when configured as 0."""
        if self._server is not None and self._server.started:
            for server in self._server.servers:
                for sock in server.sockets:
                    return sock.getsockname()[1]
        return self.config.port

    @property
    def url(self) -> str:
        return f"http://{self.config.host}:{self.port}/"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "MockGeolocationServer":
        """
        Start serving and wait until the socket is bound.

        Raises:
            RuntimeError: If the server does not start within ``startup_timeout``
        """
        if self.running:
            return self

        uvicorn_config = uvicorn.Config(
            create_app(self.config),
            host=self.config.host,
            port=self.config.port,
            log_level="warning",
        )
        self._server = uvicorn.Server(uvicorn_config)
        self._thread = threading.Thread(
            target=self._server.run, name="mock-geolocation-server", daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + self.config.startup_timeout
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self.stop()
                raise RuntimeError(
                    f"Mock geolocation server failed to start on {self.config.host}:{self.config.port}"
                )
            time.sleep(0.05)

        logger.info(
            f"Mock geolocation server running on {self.url} "
            f"(lat={self.config.latitude}, lng={self.config.longitude})"
        )
        return self

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=self.config.startup_timeout)
            if self._thread.is_alive():
                logger.warning(
                    f"Mock geolocation server thread still running after {self.config.startup_timeout}s; "
                    f"port {self.config.port} may remain in use"
                )
        self._server = None
        self._thread = None

    def serve_forever(self) -> None:
        """Serve in the foreground until interrupted."""
        uvicorn.run(
            create_app(self.config),
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )

    def __enter__(self) -> "MockGeolocationServer":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
