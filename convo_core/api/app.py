"""
API_APP
=======

FastAPI REST API for conversation management.

Endpoints:
    GET    /health                    Health check
    GET    /version                   API version
    POST   /conversation/manage       Manage history for an incoming message
    POST   /conversation/assess       Health report for a conversation
    POST   /conversation/summary      Extractive digest of a conversation
    POST   /conversation/key-info     Quick-reference facts from the tail

The API holds no conversation state; every request carries the full
history.

Usage:
    uvicorn convo_core.api.app:app --port 8432
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI
from pydantic import BaseModel, Field

from .. import __version__
from ..config import ConversationConfig
from ..context import ConversationManager
from ..models import ChatMessage, HealthReport, KeyInfo, ManagementResult

logger = logging.getLogger(__name__)


# ============================================================================
# PYDANTIC MODELS
# ============================================================================

class ConversationRequest(BaseModel):
    """Request body carrying a conversation."""
    messages: List[ChatMessage] = Field(default_factory=list, description="History, oldest first")


class ManageRequest(ConversationRequest):
    """Request body for managing a conversation."""
    message: str = Field("", description="The new incoming user message")


class SummaryResponse(BaseModel):
    summary: str


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(config: Optional[ConversationConfig] = None) -> FastAPI:
    """Create the FastAPI application around one ConversationManager."""
    app = FastAPI(
        title="convo_core",
        description="Bounded conversation-context manager",
        version=__version__,
    )
    manager = ConversationManager(config=config)
    app.state.manager = manager

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now().isoformat(),
        )

    @app.get("/version", tags=["System"])
    async def get_version():
        """Get API version information."""
        return {
            "name": "convo_core",
            "version": __version__,
            "description": "Conversation context management API",
        }

    @app.post("/conversation/manage", response_model=ManagementResult, tags=["Conversation"])
    def manage(request: ManageRequest):
        """Window, clean or reset a conversation for the incoming message."""
        result = manager.manage(request.messages, request.message)
        logger.debug(
            "Managed %d messages -> %d (reset=%s, summarized=%s)",
            len(request.messages), len(result.managed_messages),
            result.was_reset, result.was_summarized,
        )
        return result

    @app.post("/conversation/assess", response_model=HealthReport, tags=["Conversation"])
    def assess(request: ConversationRequest):
        """Classify conversation health."""
        return manager.assess(request.messages)

    @app.post("/conversation/summary", response_model=SummaryResponse, tags=["Conversation"])
    def summary(request: ConversationRequest):
        """Extractive digest of a conversation."""
        return SummaryResponse(summary=manager.summarize(request.messages))

    @app.post("/conversation/key-info", response_model=KeyInfo, tags=["Conversation"])
    def key_info(request: ConversationRequest):
        """Identifiers, names, actions and topic from the recent messages."""
        return manager.key_info(request.messages)

    return app


app = create_app()
