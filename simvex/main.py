# simvex/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .generator import Generator
from .logging_config import setup_logging
from .schemas import AskRequest, AskResponse, HealthResponse

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="SIMVEX AI Assistant", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

generator = Generator(settings)


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


# sync def: FastAPI runs it in the thread pool, so the blocking
# outbound call does not hold up other requests
@app.post("/api/ai/ask", response_model=AskResponse)
def ask(req: AskRequest):
    question = req.question or ""
    part = settings.default_part_name if req.currentPart is None else req.currentPart
    logger.info("ask: part=%r question_len=%d", part, len(question))
    result = generator.generate(part, question)
    # failures are still 200; the client only renders `answer`
    return AskResponse(answer=result.answer)
