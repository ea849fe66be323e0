"""
FastAPI application for the runbox service.

This module configures the FastAPI application and registers the health
check, the code execution endpoint and the optional debug shell
endpoint.  It is glue around :class:`~runbox.executor.ExecutionOrchestrator`:
it validates the JSON body, hands a ``(language, code)`` pair to the core
and maps the classified result onto HTTP status codes.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import Config
from ..debug import run_shell_command
from ..errors import LanguageNotSupported
from ..executor import ExecutionOrchestrator, ExecutionRequest, ExecutionResult, Outcome
from ..models import CommandResponse, ErrorResponse, ExecuteRequest, ExecuteResponse, HealthResponse
from ..pipelines import default_registry
from ..workspace import WorkspaceManager


logger = logging.getLogger("runbox")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[runbox] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


config = Config.from_env()
logger.setLevel(config.log_level)

logger.info(
    "Loaded config: scratch_root=%s, ts_template=%s, js_timeout=%s, ts_timeout=%s, cmd_exec=%s",
    config.scratch_root,
    config.ts_template_path,
    config.js_timeout_seconds,
    config.ts_timeout_seconds,
    config.enable_cmd_exec,
)

registry = default_registry(config)
workspaces = WorkspaceManager(config.scratch_root)
orchestrator = ExecutionOrchestrator(registry, workspaces)

# Outcomes answered with the error envelope instead of an ExecuteResponse.
_ERROR_STATUS = {
    Outcome.SETUP_ERROR: 500,
    Outcome.SPAWN_FAILED: 500,
    Outcome.TIMED_OUT: 504,
}


app = FastAPI(title="Runbox Code Execution Service", version="0.1.0")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _to_response(result: ExecutionResult) -> ExecuteResponse:
    return ExecuteResponse(
        stdout=_decode(result.stdout),
        stderr=_decode(result.stderr),
        exec_time=str(result.elapsed_ms),
        outcome=result.outcome.value,
        exit_code=result.exit_code,
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request and the status it was answered with."""
    path = request.url.path
    method = request.method
    client = getattr(request.client, "host", "unknown")

    logger.info("Incoming request: %s %s from %s", method, path, client)
    response = await call_next(request)
    logger.info("Response: %s %s -> %s", method, path, response.status_code)
    return response


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected malformed body for %s: %s", request.url.path, exc.errors())
    return _error(400, "Invalid JSON format")


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return a simple health check response."""
    return HealthResponse(status="ok", languages=registry.languages())


@app.post(
    "/code/exec",
    response_model=ExecuteResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def execute_code(req: ExecuteRequest):
    """Run a snippet and return its captured output.

    A snippet that exits non‑zero is still answered with 200 and its output;
    ``outcome`` and ``exitCode`` tell the caller what happened.
    """
    logger.debug("[/code/exec] language=%s, code=%r", req.language, req.code)

    try:
        result = await run_in_threadpool(
            orchestrator.execute, ExecutionRequest(language=req.language, code=req.code)
        )
    except LanguageNotSupported:
        logger.warning("[/code/exec] Unsupported language: %s", req.language)
        return _error(400, "Language not supported")
    except Exception as exc:
        logger.exception("[/code/exec] Unhandled error during execution: %s", exc)
        return _error(500, "Execution error")

    status_code = _ERROR_STATUS.get(result.outcome)
    if status_code is not None:
        return _error(status_code, result.detail or "Execution error")
    return _to_response(result)


@app.post(
    "/cmdExec",
    response_model=CommandResponse,
    responses={404: {"model": ErrorResponse}},
)
async def execute_command(request: Request):
    """Run the raw request body with ``sh -c``.  Debug deployments only."""
    if not config.enable_cmd_exec:
        return _error(404, "Not Found")

    body = await request.body()
    command = body.decode("utf-8", errors="replace")
    logger.warning("[/cmdExec] Running debug shell command")
    result = await run_in_threadpool(run_shell_command, command, config.cmd_exec_timeout_seconds)

    payload = CommandResponse(
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.exit_code,
        error=result.error,
    )
    if result.exit_code is None:
        status_code = 504 if result.timed_out else 500
        return JSONResponse(status_code=status_code, content=payload.model_dump(by_alias=True))
    return payload
