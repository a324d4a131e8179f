# -*- coding: utf-8 -*-
"""
Optional HTTP front end exposing the same single tool plus a health check.
Only imported for --mode http so the stdio server does not need FastAPI.
"""

from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .dispatcher import Dispatcher
from .errors import InvalidArgumentsError, UnknownToolError
from .models import ToolInvocationRequest


class CallToolBody(BaseModel):
    name: str
    arguments: Any = None


def build_http_app(dispatcher: Dispatcher) -> FastAPI:
    descriptor = dispatcher.descriptor
    app = FastAPI(title=f"{descriptor.name} bridge HTTP")

    @app.get("/health")
    def health():
        return {"status": "ok", "tool": descriptor.name}

    @app.get("/api/tools")
    def list_tools():
        return {"tools": [descriptor.to_dict()]}

    @app.post("/api/tools/call")
    async def call_tool(body: CallToolBody):
        request = ToolInvocationRequest(tool_name=body.name, arguments=body.arguments)
        try:
            result = await dispatcher.invoke(request)
        except UnknownToolError as e:
            return JSONResponse(status_code=404, content={"error": str(e)})
        except InvalidArgumentsError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        return result.to_dict()

    return app
