"""Tests for ServiceResult and ServiceError."""

import json

from hellod.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="serve", data={"port": 3000})
        assert result.ok is True
        assert result.data == {"port": 3000}
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="BIND_ERROR", message="in use")
        result = ServiceResult(ok=False, op="serve", error=error)
        assert result.error is not None
        assert result.error.detail == {}

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("probe", "BAD_STATUS", "answered 500", status=500)
        assert result.ok is False
        assert result.op == "probe"
        assert result.error == ServiceError(
            code="BAD_STATUS", message="answered 500", detail={"status": 500}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="serve", data={"url": "http://127.0.0.1:3000/"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["url"] == "http://127.0.0.1:3000/"
