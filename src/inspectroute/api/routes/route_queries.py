"""Route-query proxy to the external optimization workflow."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from inspectroute.api.deps import current_user, get_workflow
from inspectroute.core.protocols import IWorkflowClient
from inspectroute.models.workflow import AuthenticatedUser

router = APIRouter(tags=["routes"])


@router.post("/query")
async def route_query(
    payload: dict[str, Any] = Body(...),
    workflow: IWorkflowClient = Depends(get_workflow),
    user: AuthenticatedUser = Depends(current_user),
) -> JSONResponse:
    response = await workflow.submit_route_query(user.id, payload)
    return JSONResponse(response.data, status_code=response.status_code)
