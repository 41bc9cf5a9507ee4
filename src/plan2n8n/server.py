from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .client import N8nClient
from .config import log_level_from_env
from .errors import ConfigError, UpstreamError
from .logger import init_logger
from .tools import TOOLS, call_tool

logger = logging.getLogger(__name__)

init_logger(log_level_from_env())

app = FastAPI(title="plan2n8n", version="0.2.0")


def get_client() -> Optional[N8nClient]:
    """Overridden in tests; ``None`` lets each tool build one from the environment."""
    return None


@app.get("/api/tools")
def list_tools():
    return [{"name": t.name, "description": t.description} for t in TOOLS.values()]


@app.post("/api/tools/{name}")
def invoke_tool(name: str, args: Optional[Dict[str, Any]] = Body(default=None),
                client: Optional[N8nClient] = Depends(get_client)):
    if name not in TOOLS:
        raise HTTPException(status_code=404, detail=f"unknown tool {name!r}")
    try:
        return call_tool(name, args, client=client)
    except ValidationError as exc:
        return JSONResponse(status_code=422, content={"error": "invalid arguments",
                                                      "detail": exc.errors(include_url=False, include_context=False,
                                                                          include_input=False)})
    except ConfigError as exc:
        return JSONResponse(status_code=500, content={"error": str(exc)})
    except UpstreamError as exc:
        logger.warning("tool %s failed upstream: %s", name, exc)
        return JSONResponse(status_code=502, content={"error": exc.message, "status": exc.status})
