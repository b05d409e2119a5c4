"""
HTTP API for fitplan.

This module wires the plan endpoints and the static front-end into one FastAPI application.
Routes are matched in this order:
- **POST /api/plan**       - generate a weekly plan: {"goal": "...", "days": 3}
- **POST /api/plan/edit**  - edit a plan: {"csv": "...", "instructions": "..."}
- anything else            - static file from the public root, or ``404 Not found``
"""

import logging
from pathlib import Path
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Type,
    TypeVar,
)

from fastapi import (
    APIRouter,
    Depends,
    FastAPI,
    Request,
    Response,
)
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import (
    JSONResponse,
    PlainTextResponse,
)
from pydantic import (
    BaseModel,
    ValidationError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitplan.agent.client import AgentClient
from fitplan.agent.prompts import (
    build_create_prompt,
    build_edit_prompt,
)
from fitplan.agent.task_runner import (
    TaskExecutionError,
    run_task_to_text,
)
from fitplan.api.models import (
    EditRequest,
    ErrorResponse,
    PlanRequest,
    PlanResponse,
)
from fitplan.api.static import serve_static
from fitplan.common import (
    AnsiColors,
    colored_print,
)

logger = logging.getLogger(__name__)

# Router misses that fall through to the static front-end
STATIC_FALLBACK_STATUSES = {404, 405}

ModelT = TypeVar("ModelT", bound=BaseModel)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------
def get_agent(request: Request) -> AgentClient:
    """Return the agent client the application was built with."""
    return request.app.state.agent


def get_model(request: Request) -> str:
    """Return the model identifier every task runs with."""
    return request.app.state.model


def json_body(model: Type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Dependency that parses the raw request body as JSON into *model*.

    The Content-Type header is ignored, so ``text/plain`` or form-encoded posts of a JSON
    document (``curl -d``) are accepted like ``application/json`` ones.
    """

    async def parse(request: Request) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    return parse


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.post("/api/plan", response_model=PlanResponse, summary="Generate a weekly plan")
async def create_plan(
    req: PlanRequest = Depends(json_body(PlanRequest)),
    agent: AgentClient = Depends(get_agent),
    model: str = Depends(get_model),
) -> PlanResponse:
    """Ask the agent for a new Monday-Sunday plan and return its raw CSV output."""
    logger.info("Generating plan (days=%d)", req.days)

    raw = await run_task_to_text(agent, build_create_prompt(req.goal, req.days), model)

    return PlanResponse(
        csv=raw,
        log=[
            f'User: Generate plan (goal="{req.goal}", days={req.days})',
            "Agent: Plan CSV received.",
        ],
    )


@router.post("/api/plan/edit", response_model=PlanResponse, summary="Edit an existing plan")
async def edit_plan(
    req: EditRequest = Depends(json_body(EditRequest)),
    agent: AgentClient = Depends(get_agent),
    model: str = Depends(get_model),
) -> PlanResponse:
    """Ask the agent to apply the user's instructions to the plan the client sent."""
    logger.info("Editing plan (%d csv chars)", len(req.csv))

    raw = await run_task_to_text(agent, build_edit_prompt(req.csv, req.instructions), model)

    return PlanResponse(
        csv=raw,
        log=[
            f'User: Edit plan ("{req.instructions}")',
            "Agent: Updated plan CSV received.",
        ],
    )


# ---------------------------------------------------------------------------
# Error boundaries
# ---------------------------------------------------------------------------
def summarize_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only where and why validation failed; the offending input may not be JSON-safe."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


async def static_fallback_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Serve the front-end for any method/path no route accepted."""
    if exc.status_code not in STATIC_FALLBACK_STATUSES:
        return await http_exception_handler(request, exc)

    response = await serve_static(request.app.state.public_root, request.url.path)
    if response is None:
        return PlainTextResponse("Not found", status_code=404)
    return response


async def malformed_body_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable JSON or a body missing required fields is the caller's fault."""
    errors = summarize_errors(list(exc.errors()))
    logger.warning("Rejected request body: %s", errors)
    body = ErrorResponse(detail="Malformed request body", errors=errors)
    return JSONResponse(status_code=400, content=body.model_dump())


async def task_failure_handler(_request: Request, exc: TaskExecutionError) -> JSONResponse:
    """Agent failures are reported without leaking provider details to the client."""
    logger.error("Plan request failed: %s", exc)
    body = ErrorResponse(detail="Agent task failed")
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(agent: AgentClient, model: str, public_root: str | Path) -> FastAPI:
    """
    Build the application around an already constructed agent client.

    Parameters
    ----------
    agent:
        Shared agent client; lives as long as the application.
    model:
        Model identifier passed to every task.
    public_root:
        Directory the static front-end is served from.
    """
    app = FastAPI(
        title="fitplan",
        version="0.1.0",
        description="Weekly workout plans generated and edited by an LLM agent",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.agent = agent
    app.state.model = model
    app.state.public_root = Path(public_root)

    app.add_exception_handler(StarletteHTTPException, static_fallback_handler)
    app.add_exception_handler(RequestValidationError, malformed_body_handler)
    app.add_exception_handler(TaskExecutionError, task_failure_handler)
    app.include_router(router)
    return app


# ---------------------------------------------------------------------------
# Public helper to launch the API (imported by main.py)
# ---------------------------------------------------------------------------
def run_api(app: FastAPI, host: str = "0.0.0.0", port: int = 8000, log_level: str = "info") -> None:
    """Start a uvicorn server hosting *app*.

    Parameters
    ----------
    app:
        Application returned by :func:`create_app`.
    host, port:
        Bind address for the HTTP server.
    log_level:
        Logging level for uvicorn.
    """

    # Lazy import - keeps uvicorn an optional dependency at pkg-import time
    import uvicorn  # pylint: disable=import-outside-toplevel

    logger.info("Starting fitplan API at %s:%d (log_level=%s)", host, port, log_level)

    colored_print(f"Server listening on http://localhost:{port}", AnsiColors.GREEN)
    colored_print(f"Serving front-end from {app.state.public_root}", AnsiColors.BLUE)
    uvicorn.run(app, host=host, port=port, log_level=log_level)
