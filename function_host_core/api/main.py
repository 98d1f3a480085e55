"""FastAPI app exposing the function registry and host settings."""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from function_host_core.core.config import ConfigLoader, ServiceConfig
from function_host_core.core.exceptions import (
    BaseAppException,
    ConfigParseError,
    InvalidContentError,
    InvalidFunctionNameError,
    NotFoundError,
    OperationNotImplementedError,
)
from function_host_core.core.logging import Logger
from function_host_core.registry.host_settings import HostSettingsStore
from function_host_core.registry.registry import FunctionRegistry
from function_host_core.schemas import ErrorResponse, HealthResponse
from function_host_core.vfs.resolver import VfsResolver

STATUS_BY_EXCEPTION = (
    (NotFoundError, 404),
    (InvalidFunctionNameError, 400),
    (InvalidContentError, 400),
    (OperationNotImplementedError, 501),
    (ConfigParseError, 500),
)


def status_for(exc: BaseAppException) -> int:
    for exc_type, status in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status
    return 500


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """
    Builds the application. Without an explicit config, settings come from
    the FNHOST_CONFIG file (if set) and FNHOST_* environment variables.
    """
    if config is None:
        config = ConfigLoader(os.environ.get("FNHOST_CONFIG")).load()

    logger = Logger("function_host.api", config.log_level)
    app = FastAPI(title="Function Host API", version="0.1.0")
    app.state.config = config

    def get_registry(request: Request) -> FunctionRegistry:
        authority = config.authority or str(request.base_url).rstrip("/")
        return FunctionRegistry(config, VfsResolver(authority, config.root_path), logger)

    def get_host_settings() -> HostSettingsStore:
        return HostSettingsStore(config, logger)

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
        status = status_for(exc)
        if status >= 500 and not isinstance(exc, OperationNotImplementedError):
            logger.error("Request failed", path=request.url.path, error=type(exc).__name__, detail=str(exc))
        body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(functions_path=str(config.functions_path))

    @app.get("/api/functions")
    async def list_functions(registry: FunctionRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
        return await registry.list()

    # registered before /api/functions/{name}/... so "runs" is not taken as a name
    @app.get("/api/functions/runs/{run_id}")
    async def get_run_status(run_id: str, registry: FunctionRegistry = Depends(get_registry)) -> Any:
        return await registry.get_run_status(run_id)

    @app.put("/api/functions/{name}", status_code=201)
    async def create_or_update(name: str, request: Request, registry: FunctionRegistry = Depends(get_registry)) -> Dict[str, Any]:
        return await registry.create_or_update(name, await request.body())

    @app.get("/api/functions/{name}")
    async def get_function(name: str, registry: FunctionRegistry = Depends(get_registry)) -> Dict[str, Any]:
        return await registry.get(name)

    @app.delete("/api/functions/{name}", status_code=204)
    async def delete_function(name: str, registry: FunctionRegistry = Depends(get_registry)) -> Response:
        await registry.delete(name)
        return Response(status_code=204)

    @app.get("/api/functions/{name}/script")
    async def get_script(name: str, registry: FunctionRegistry = Depends(get_registry)) -> StreamingResponse:
        script = await registry.get_script(name)
        return StreamingResponse(script.iter_bytes(), media_type=script.media_type, background=BackgroundTask(script.close))

    @app.put("/api/functions/{name}/script", status_code=201)
    async def put_script(name: str, request: Request, registry: FunctionRegistry = Depends(get_registry)) -> Response:
        await registry.put_script(name, await request.body())
        return Response(status_code=201)

    @app.post("/api/functions/{name}/run")
    async def run_function(name: str, request: Request, registry: FunctionRegistry = Depends(get_registry)) -> Any:
        return await registry.run(name, await request.body())

    @app.get("/api/host/settings")
    async def get_settings(store: HostSettingsStore = Depends(get_host_settings)) -> Any:
        return await store.get()

    @app.put("/api/host/settings", status_code=201)
    async def put_settings(request: Request, store: HostSettingsStore = Depends(get_host_settings)) -> Response:
        await store.put(await request.body())
        return Response(status_code=201)

    logger.info("Function host configured", functions_path=str(config.functions_path), root_path=str(config.root_path))
    return app
