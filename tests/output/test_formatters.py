"""Tests for the format_result dispatcher and OutputSettings."""

import json

from roamclosure.output.formatters import OutputSettings, format_result
from roamclosure.services.result import ServiceError, ServiceResult


def _ok(op: str = "closure", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok(notes=["/a.org"]), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["notes"] == ["/a.org"]

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_ok(notes=["/a.org"]), settings=settings))["ok"]

    def test_json_error(self) -> None:
        result = ServiceResult(
            ok=False, op="closure", error=ServiceError(code="STORE_ERROR", message="x")
        )
        data = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert data["error"]["code"] == "STORE_ERROR"

    def test_quiet_mode(self) -> None:
        result = _ok(notes=["/a.org"], assets=["/p.png"])
        assert format_result(result, settings=OutputSettings(quiet=True)) == "/a.org\n/p.png"

    def test_default_is_human(self) -> None:
        assert format_result(_ok(notes=["/a.org"], assets=[])).startswith("OK")
