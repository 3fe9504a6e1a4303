"""
Glot HTTP Server
================
FastAPI application exposing the glot front end over JSON.

Launch:
    python -m glot.server

Endpoints:
    GET  /api/health                → Liveness and version
    POST /api/tokenize              → Tokens for one line
    POST /api/parse                 → Statement or expression tree for one line
    POST /api/evaluate              → Integer value of one expression
    POST /api/run                   → Output of a whole numbered program
"""
import dataclasses
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import GlotConfig
from .errors import GlotError, LineError
from .interpreter import Interpreter, interpret
from .lexer import tokenize
from .log import configure, get_logger
from .parser import format_expression, format_statement, parse_expression, parse_statement
from .program import parse_program

logger = get_logger(__name__)


# ─────────────────────────────────────────────────────────────
#  App Setup
# ─────────────────────────────────────────────────────────────

app = FastAPI(title="Glot", version=__version__)


@app.exception_handler(GlotError)
async def glot_error_handler(request: Request, exc: GlotError):
    """Malformed input is the client's problem: report kind and message."""
    body: dict[str, Any] = {"kind": exc.kind, "message": str(exc)}
    if isinstance(exc, LineError):
        body["line_index"] = exc.line_index
        body["line_number"] = exc.line_number
    logger.info("rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content=body)


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class LineRequest(BaseModel):
    source: str


class EvaluateRequest(BaseModel):
    source: str
    variables: dict[str, int] = {}


class ParseRequest(BaseModel):
    source: str
    mode: str = "statement"  # "statement" or "expression"


class RunRequest(BaseModel):
    source: str
    continue_on_error: bool = False


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def to_json(node: Any) -> Any:
    """Convert parser nodes and tokens into plain JSON values."""
    if isinstance(node, Enum):
        return node.name
    if dataclasses.is_dataclass(node):
        data = {"node": type(node).__name__}
        for f in dataclasses.fields(node):
            data[f.name] = to_json(getattr(node, f.name))
        return data
    if isinstance(node, (list, tuple)):
        return [to_json(n) for n in node]
    return node


# ─────────────────────────────────────────────────────────────
#  Routes
# ─────────────────────────────────────────────────────────────

@app.get("/api/health")
async def api_health():
    return {"status": "ok", "version": __version__}


@app.post("/api/tokenize")
async def api_tokenize(req: LineRequest):
    """Return the token stream for one line."""
    tokens = tokenize(req.source)
    return {"tokens": [to_json(t) for t in tokens]}


@app.post("/api/parse")
async def api_parse(req: ParseRequest):
    """Parse one line as a statement (default) or a bare expression."""
    if req.mode == "expression":
        tree = parse_expression(tokenize(req.source))
        return {"tree": to_json(tree), "source": format_expression(tree)}
    if req.mode == "statement":
        statement = parse_statement(tokenize(req.source))
        return {"tree": to_json(statement), "source": format_statement(statement)}
    raise HTTPException(status_code=422, detail=f"Unknown parse mode: {req.mode}")


@app.post("/api/evaluate")
async def api_evaluate(req: EvaluateRequest):
    """Evaluate one expression against the supplied variables."""
    tree = parse_expression(tokenize(req.source))
    return {"value": interpret(tree, req.variables)}


@app.post("/api/run")
async def api_run(req: RunRequest):
    """Assemble and run a numbered program, returning everything it printed."""
    program = parse_program(req.source.splitlines(), continue_on_error=req.continue_on_error)
    interp = Interpreter(output_fn=lambda s: None)
    executed = interp.run(program)
    return {
        "output": interp.output_log,
        "variables": interp.variables,
        "executed": executed,
        "errors": [
            {"kind": e.kind, "message": str(e), "line_index": e.line_index}
            for e in program.errors
        ],
    }


def serve(config: Optional[GlotConfig] = None):
    """Run the server with uvicorn."""
    import uvicorn

    config = config or GlotConfig.from_env()
    configure(config.log_level)
    logger.info("serving on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    serve()
