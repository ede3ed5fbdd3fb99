"""
Discovery API Routes.

Stateless conversation endpoints. The flow is:
1. POST /start - Begin with a business description
2. POST /continue - Send each reply together with the state from the previous turn

A turn is complete when response.complete is true; response.app_config then
holds the build configuration.
"""

import structlog
from fastapi import APIRouter, Depends

from src.api.dependencies import get_engine
from src.api.models import (
    ContinueDiscoveryRequest,
    DiscoveryTurnResponse,
    StartDiscoveryRequest,
)
from src.discovery.engine import DiscoveryEngine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/discovery", tags=["Discovery"])


@router.post(
    "/start",
    response_model=DiscoveryTurnResponse,
    summary="Start Discovery",
    description="Analyze the first description and return the first question.",
)
async def start_discovery(
    request: StartDiscoveryRequest,
    engine: DiscoveryEngine = Depends(get_engine),
) -> DiscoveryTurnResponse:
    turn = await engine.start(request.description, seed=request.seed)
    logger.info(
        "discovery_turn",
        conversation_id=turn.state.conversation_id,
        step=turn.response.step.value,
        complete=turn.response.complete,
    )
    return DiscoveryTurnResponse(response=turn.response, state=turn.state)


@router.post(
    "/continue",
    response_model=DiscoveryTurnResponse,
    summary="Continue Discovery",
    description="Apply the user's reply to the conversation state and return the next step.",
)
async def continue_discovery(
    request: ContinueDiscoveryRequest,
    engine: DiscoveryEngine = Depends(get_engine),
) -> DiscoveryTurnResponse:
    turn = await engine.respond(request.state, request.message)
    logger.info(
        "discovery_turn",
        conversation_id=turn.state.conversation_id,
        step=turn.response.step.value,
        complete=turn.response.complete,
    )
    return DiscoveryTurnResponse(response=turn.response, state=turn.state)
