"""Webmail Agent — FastAPI entrypoint (chat endpoint + health check)."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.core.config import settings
from src.core.router import handle_agent_request
from src.core.schemas.chat import AgentRequest
from src.skills import create_registry
from src.skills.base import SkillRegistry
from src.skills.prompt_loader import validate_all_prompts

logging.basicConfig(level=getattr(logging, settings.log_level))
logger = logging.getLogger(__name__)

SKILLS_DIR = Path(__file__).resolve().parent.parent / "src" / "skills"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Webmail Agent...")
    for error in validate_all_prompts(SKILLS_DIR):
        logger.error("Prompt file problem: %s", error)
    if not getattr(app.state, "registry", None):
        app.state.registry = create_registry(settings)
    yield
    logger.info("Shutting down Webmail Agent...")


app = FastAPI(
    title="Webmail Agent",
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/agent")
async def agent(request: Request):
    try:
        payload = AgentRequest.model_validate_json(await request.body())
    except ValidationError as e:
        logger.info("Rejected agent payload: %d validation errors", e.error_count())
        return JSONResponse({"error": "Invalid payload"}, status_code=400)

    registry: SkillRegistry = request.app.state.registry
    result = await handle_agent_request(payload, registry)
    return result.to_response().model_dump()
