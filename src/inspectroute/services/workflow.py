"""Client for the external workflow service (ingestion and route-query webhooks)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from inspectroute.core.config import WorkflowConfig
from inspectroute.core.exceptions import WorkflowError
from inspectroute.models.workflow import WorkflowResponse

logger = logging.getLogger(__name__)

LOGGED_BODY_CHARS = 500


class WorkflowClient:
    """IWorkflowClient that forwards authenticated requests to the n8n webhooks.

    The verified user id is always attached; the workflow itself is opaque.
    """

    def __init__(self, config: WorkflowConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self._upload_url = config.upload_url
        self._route_query_url = config.route_query_url
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _post(self, step: str, url: str, user_id: str, **kwargs: Any) -> WorkflowResponse:
        try:
            response = await self._http.post(url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Workflow request failed: %s", exc, extra={"step": step, "user_id": user_id})
            raise WorkflowError(f"{step} request failed: {exc}") from exc

        body = response.text
        logger.info(
            "Workflow response: %s",
            body[:LOGGED_BODY_CHARS],
            extra={"step": step, "user_id": user_id, "status_code": response.status_code},
        )

        if response.status_code >= 400:
            raise WorkflowError(
                f"{step} returned HTTP {response.status_code}", status_code=response.status_code
            )

        try:
            data = response.json() if body.strip() else {}
        except ValueError:
            data = {"raw": body}
        if not isinstance(data, (dict, list)):
            data = {"raw": data}
        return WorkflowResponse(status_code=response.status_code, data=data)

    async def submit_upload(
        self,
        user_id: str,
        filename: str,
        content: bytes,
        company_hint: str | None = None,
    ) -> WorkflowResponse:
        form: dict[str, str] = {"user_id": user_id}
        if company_hint:
            form["company"] = company_hint
        logger.info("Forwarding upload %s", filename, extra={"user_id": user_id, "company": company_hint})
        return await self._post(
            "upload",
            self._upload_url,
            user_id,
            data=form,
            files={"file": (filename, content)},
        )

    async def submit_route_query(self, user_id: str, payload: dict[str, Any]) -> WorkflowResponse:
        body = {**payload, "user_id": user_id}
        logger.info(
            "Forwarding %s", payload.get("action", "route-query"), extra={"user_id": user_id}
        )
        return await self._post("route-query", self._route_query_url, user_id, json=body)
