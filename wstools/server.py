"""HTTP API exposing the tool catalog and dispatcher."""

import json
import logging

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from .models import ToolContext
from .tools import get_tool_catalog, run_tool

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024


class ToolServer:
    """Starlette app serving one workspace. Routes are thin wrappers over the dispatcher."""

    def __init__(self, ctx: ToolContext):
        self.ctx = ctx
        self.app = self._build_app()

    def _build_app(self) -> Starlette:
        routes = [
            Route("/api/health", self._health, methods=["GET"]),
            Route("/api/tools", self._list_tools, methods=["GET"]),
            Route("/api/tools/{name}", self._run_tool, methods=["POST"]),
        ]
        return Starlette(routes=routes)

    async def _health(self, request: Request) -> JSONResponse:
        return JSONResponse({"ok": True})

    async def _list_tools(self, request: Request) -> JSONResponse:
        return JSONResponse({"ok": True, "data": get_tool_catalog()})

    async def _run_tool(self, request: Request) -> JSONResponse:
        name = request.path_params["name"]

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > MAX_BODY_BYTES:
            return JSONResponse({"ok": False, "error": "request body too large"}, status_code=413)

        body = await request.body()
        if len(body) > MAX_BODY_BYTES:
            return JSONResponse({"ok": False, "error": "request body too large"}, status_code=413)

        if body.strip():
            try:
                tool_input = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError):
                return JSONResponse({"ok": False, "error": "request body must be JSON"}, status_code=400)
        else:
            tool_input = {}

        result = await run_in_threadpool(run_tool, name, tool_input, self.ctx)
        return JSONResponse(result.to_dict(), status_code=result.status_code)


def create_app(ctx: ToolContext) -> Starlette:
    return ToolServer(ctx).app


def serve(ctx: ToolContext, host: str, port: int) -> None:
    """Run the HTTP API with uvicorn until interrupted."""
    import uvicorn

    logger.info("Serving tools for %s on http://%s:%d", ctx.workspace_root, host, port)
    uvicorn.run(create_app(ctx), host=host, port=port, log_level="warning")
