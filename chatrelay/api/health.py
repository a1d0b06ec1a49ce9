from __future__ import annotations

import logging
from typing import List, Dict, Any
from fastapi import APIRouter, Depends, Request

from chatrelay.api.deps import get_message_log, get_registry
from chatrelay.models.schemas import StoreStats
from chatrelay.services.message_log import MessageLog
from chatrelay.services.participant_registry import ParticipantRegistry

logger = logging.getLogger("chatrelay.api.health")
router = APIRouter()


@router.get("/ping")
def ping():
    logger.info("GET /health/ping")
    return {"ok": True}


@router.get("/store", response_model=StoreStats)
def store_health(
    registry: ParticipantRegistry = Depends(get_registry),
    log: MessageLog = Depends(get_message_log),
):
    out = StoreStats(participants=registry.count(), messages=log.count())
    logger.info("GET /health/store participants=%d messages=%d", out.participants, out.messages)
    return out


@router.get("/routes")
def list_routes(request: Request):
    """Every documented operation, one entry per path, read from the OpenAPI schema."""
    paths: Dict[str, Dict[str, Any]] = request.app.openapi().get("paths", {})
    out: List[Dict[str, Any]] = [
        {
            "path": path,
            "methods": sorted(m.upper() for m in ops),
            "operations": sorted(op.get("operationId", "") for op in ops.values()),
        }
        for path, ops in sorted(paths.items())
    ]
    logger.info("GET /health/routes count=%d", len(out))
    return {"ok": True, "routes": out}
