"""Tests for UploadService."""

from __future__ import annotations

import threading

import pytest

from inspectroute.core.exceptions import InvalidUploadError, WorkflowError
from inspectroute.models.company_profile import CompanyProfileUpsert
from inspectroute.models.workflow import AuthenticatedUser
from inspectroute.services.detection import CompanyDetector
from inspectroute.services.uploads import UploadService
from tests.fakes import MemoryProfileStore, RecordingWorkflowClient

USER = AuthenticatedUser(id="user-1", email="a@example.com")
HEADERS = ["Order #", "Street", "City", "State", "Zip"]
CSV = (",".join(HEADERS) + "\n1,1 Main,Salem,OR,97301\n").encode()


@pytest.fixture
def workflow():
    return RecordingWorkflowClient()


@pytest.fixture
def service(workflow):
    store = MemoryProfileStore()
    store.upsert_profile(CompanyProfileUpsert(code="MIL", name="MIL", column_fingerprint=HEADERS))
    return UploadService(CompanyDetector(store), workflow)


@pytest.mark.asyncio
async def test_hint_skips_detection(service, workflow):
    result = await service.submit(USER, "x.csv", b"a,b\n", company_hint=" sig ")
    assert result.company_detected == "SIG"
    assert result.detected_by == "hint"
    assert workflow.uploads[0]["company"] == "SIG"


@pytest.mark.asyncio
async def test_fingerprint_detection(service, workflow):
    result = await service.submit(USER, "mil.csv", CSV)
    assert result.company_detected == "MIL"
    assert result.detected_by == "fingerprint"
    assert workflow.uploads == [
        {"user_id": "user-1", "filename": "mil.csv", "content": CSV, "company": "MIL"}
    ]


@pytest.mark.asyncio
async def test_unknown_format_forwarded_without_company(service, workflow):
    result = await service.submit(USER, "other.csv", b"Foo,Bar\n1,2\n", company_hint="  ")
    assert result.company_detected is None
    assert result.detected_by is None
    assert workflow.uploads[0]["company"] is None
    assert result.workflow.data == {"success": True}


@pytest.mark.asyncio
async def test_empty_file_rejected(service, workflow):
    with pytest.raises(InvalidUploadError):
        await service.submit(USER, "empty.csv", b"")
    assert workflow.uploads == []


@pytest.mark.asyncio
async def test_workflow_error_propagates():
    workflow = RecordingWorkflowClient(error=WorkflowError("upload returned HTTP 500", status_code=500))
    service = UploadService(CompanyDetector(MemoryProfileStore()), workflow)
    with pytest.raises(WorkflowError):
        await service.submit(USER, "x.csv", CSV)


class ThreadRecordingDetector(CompanyDetector):
    def __init__(self, store):
        super().__init__(store)
        self.thread_ids: list[int] = []

    def detect_file(self, filename, data):
        self.thread_ids.append(threading.get_ident())
        return super().detect_file(filename, data)


@pytest.mark.asyncio
async def test_detection_runs_off_the_event_loop_thread(workflow):
    detector = ThreadRecordingDetector(MemoryProfileStore())
    await UploadService(detector, workflow).submit(USER, "x.csv", CSV)
    assert len(detector.thread_ids) == 1
    assert detector.thread_ids[0] != threading.get_ident()
