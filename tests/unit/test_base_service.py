# =============================================================================
# tests/unit/test_base_service.py
# Unit Tests for ServiceResult and BaseService
# =============================================================================

from concurrent.futures import ThreadPoolExecutor

import pytest

from venue_core.errors import DataValidationError, RemoteRejected, RemoteUnavailable
from venue_core.services.base_service import BaseService, ServiceResult


class _Service(BaseService):
    pass


class TestServiceResult:

    def test_from_site_error_keeps_code_and_details(self):
        result = ServiceResult.from_exception(DataValidationError("bad", field="title", collection="events"))

        assert not result
        assert result.error_code == "DATA_001"
        assert result.metadata == {"field": "title", "collection": "events"}

    def test_from_other_exception(self):
        result = ServiceResult.from_exception(KeyError("x"))
        assert result.error_code == "EXCEPTION"

    def test_sync_metadata(self):
        assert ServiceResult.ok(1).sync_metadata() == {"synced": True}

        failed = ServiceResult.from_exception(RemoteUnavailable("offline"))
        assert failed.sync_metadata() == {"synced": False, "error_code": "REMOTE_001", "error": "offline"}


class TestBaseService:

    def test_logger_named_after_class(self):
        assert _Service().logger.name == "venue_core._Service"

    def test_call_remote_success(self):
        result = _Service().call_remote(lambda a, b: a + b, 2, 3)

        assert result.success
        assert result.data == 5

    def test_call_remote_failure_becomes_result(self):
        def rejected():
            raise RemoteRejected("duplicate key", remote_code="23505")

        result = _Service().call_remote(rejected)

        assert not result.success
        assert result.error_code == "REMOTE_002"

    def test_call_remote_propagates_bugs(self):
        def broken():
            raise ZeroDivisionError()

        with pytest.raises(ZeroDivisionError):
            _Service().call_remote(broken)

    def test_settle(self):
        def offline():
            raise RemoteUnavailable("offline")

        with ThreadPoolExecutor(max_workers=2) as pool:
            ok = pool.submit(lambda: [1, 2])
            failed = pool.submit(offline)

        service = _Service()
        assert service.settle(ok).data == [1, 2]
        assert service.settle(failed).error_code == "REMOTE_001"
