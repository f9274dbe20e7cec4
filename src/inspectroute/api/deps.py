"""FastAPI dependencies resolving services wired in the lifespan.

Tests replace these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from inspectroute.core.config import AppSettings
from inspectroute.core.protocols import (
    IAuthVerifier,
    IBillingService,
    ICompanyProfileStore,
    IWorkflowClient,
)
from inspectroute.models.workflow import AuthenticatedUser
from inspectroute.services.auth import bearer_token
from inspectroute.services.detection import CompanyDetector
from inspectroute.services.uploads import UploadService


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_profile_store(request: Request) -> ICompanyProfileStore:
    return request.app.state.profile_store


def get_auth_verifier(request: Request) -> IAuthVerifier:
    return request.app.state.auth_verifier


def get_workflow(request: Request) -> IWorkflowClient:
    return request.app.state.workflow


def get_billing(request: Request) -> IBillingService:
    return request.app.state.billing


def get_detector(store: ICompanyProfileStore = Depends(get_profile_store)) -> CompanyDetector:
    return CompanyDetector(store)


def get_upload_service(
    detector: CompanyDetector = Depends(get_detector),
    workflow: IWorkflowClient = Depends(get_workflow),
) -> UploadService:
    return UploadService(detector, workflow)


def current_user(
    authorization: str | None = Header(default=None),
    verifier: IAuthVerifier = Depends(get_auth_verifier),
) -> AuthenticatedUser:
    """Signed-in user for the request; raises AuthenticationError otherwise."""
    return verifier.verify(bearer_token(authorization))
