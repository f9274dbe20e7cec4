"""Upload submission: optional fingerprint pre-classification, then ingestion."""

from __future__ import annotations

import asyncio
import logging

from inspectroute.core.exceptions import InvalidUploadError
from inspectroute.core.protocols import IWorkflowClient
from inspectroute.models.workflow import AuthenticatedUser, UploadResult
from inspectroute.services.detection import CompanyDetector

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(self, detector: CompanyDetector, workflow: IWorkflowClient) -> None:
        self._detector = detector
        self._workflow = workflow

    async def submit(
        self,
        user: AuthenticatedUser,
        filename: str,
        content: bytes,
        company_hint: str | None = None,
    ) -> UploadResult:
        if not content:
            raise InvalidUploadError("No file provided")

        company = company_hint.strip().upper() if company_hint and company_hint.strip() else None
        detected_by = "hint" if company else None

        if company is None:
            # Header parsing and the catalog read are blocking.
            profile = await asyncio.to_thread(self._detector.detect_file, filename, content)
            if profile is not None:
                company = profile.code
                detected_by = "fingerprint"
            else:
                logger.info("No confident company match for %s", filename, extra={"user_id": user.id})

        response = await self._workflow.submit_upload(
            user.id, filename, content, company_hint=company
        )
        return UploadResult(
            filename=filename,
            company_detected=company,
            detected_by=detected_by,
            workflow=response,
        )
