"""Inspection export upload endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from inspectroute.api.deps import current_user, get_upload_service
from inspectroute.models.workflow import AuthenticatedUser, UploadResult
from inspectroute.services.uploads import UploadService

router = APIRouter(tags=["uploads"])


@router.post("", response_model=UploadResult)
async def upload_inspections(
    file: UploadFile = File(...),
    company: Optional[str] = Form(default=None),
    service: UploadService = Depends(get_upload_service),
    user: AuthenticatedUser = Depends(current_user),
) -> UploadResult:
    content = await file.read()
    return await service.submit(user, file.filename or "upload.csv", content, company_hint=company)
