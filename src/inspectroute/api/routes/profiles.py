"""Company profile catalog, detection and mapping-suggestion endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from inspectroute.api.deps import current_user, get_detector, get_profile_store
from inspectroute.core.exceptions import ProfileNotFoundError
from inspectroute.core.protocols import ICompanyProfileStore
from inspectroute.models.company_profile import CompanyProfile, CompanyProfileUpsert
from inspectroute.models.workflow import AuthenticatedUser
from inspectroute.profiles import column_mapping
from inspectroute.services.detection import CompanyDetector

router = APIRouter(tags=["profiles"])


class HeadersRequest(BaseModel):
    headers: list[str] = Field(default_factory=list)


class ProfileScore(BaseModel):
    code: str
    name: str
    ratio: float


class DetectionResponse(BaseModel):
    match: Optional[CompanyProfile] = None
    scores: list[ProfileScore] = Field(default_factory=list)


class SuggestMappingsRequest(HeadersRequest):
    name: Optional[str] = None


class SuggestMappingsResponse(BaseModel):
    mappings: dict[str, Optional[str]]
    labels: dict[str, str]
    column_mappings: dict[str, str]
    unmapped: list[str]
    valid: bool
    missing: list[str]
    suggested_code: Optional[str] = None


@router.get("", response_model=list[CompanyProfile])
def list_profiles(
    store: ICompanyProfileStore = Depends(get_profile_store),
    _user: AuthenticatedUser = Depends(current_user),
) -> list[CompanyProfile]:
    return store.list_profiles()


@router.put("", response_model=CompanyProfile)
def save_profile(
    params: CompanyProfileUpsert,
    store: ICompanyProfileStore = Depends(get_profile_store),
    _user: AuthenticatedUser = Depends(current_user),
) -> CompanyProfile:
    return store.upsert_profile(params)


@router.post("/detect", response_model=DetectionResponse)
def detect_company(
    body: HeadersRequest,
    detector: CompanyDetector = Depends(get_detector),
    _user: AuthenticatedUser = Depends(current_user),
) -> DetectionResponse:
    match, scores = detector.explain(body.headers)
    return DetectionResponse(
        match=match,
        scores=[ProfileScore(code=p.code, name=p.name, ratio=round(r, 4)) for p, r in scores],
    )


@router.post("/suggest-mappings", response_model=SuggestMappingsResponse)
def suggest_mappings(body: SuggestMappingsRequest) -> SuggestMappingsResponse:
    mappings = column_mapping.suggest_mappings(body.headers)
    validation = column_mapping.validate_mappings(mappings)
    return SuggestMappingsResponse(
        mappings=mappings,
        labels={field: column_mapping.FIELD_LABELS[field] for field in mappings},
        column_mappings=column_mapping.format_mappings_for_db(mappings),
        unmapped=column_mapping.unmapped_columns(body.headers, mappings),
        valid=validation.valid,
        missing=validation.missing,
        suggested_code=column_mapping.generate_company_code(body.name) if body.name else None,
    )


@router.get("/{code}", response_model=CompanyProfile)
def get_profile(
    code: str,
    store: ICompanyProfileStore = Depends(get_profile_store),
    _user: AuthenticatedUser = Depends(current_user),
) -> CompanyProfile:
    profile = store.get_profile(code)
    if profile is None:
        raise ProfileNotFoundError(code.upper())
    return profile
