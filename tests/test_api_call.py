"""Tests for remote-call classification (core/api_call.py).

Coverage:
* 401/403 → auth outcome, 404 → input outcome, anything else → http.
* Transport failures become an http outcome with status 500 and a cause.
* The spinner is stopped on every error path and left running on success.
* ``unwrap_outcome`` raises the typed error matching each outcome.
"""

from __future__ import annotations

import asyncio

import pytest
from conftest import FakeSpinner

from socket_cli.core.api_call import (
    AUTH_MESSAGE,
    TRANSPORT_FAILURE_STATUS,
    handle_api_call,
    not_found_message,
    unwrap_outcome,
)
from socket_cli.core.models import (
    ApiAuthError,
    ApiHttpError,
    ApiInputError,
    ApiSuccess,
    SdkResult,
)
from socket_cli.exceptions import AuthError, HttpError, InputError, NetworkError


async def _returns(result: SdkResult) -> SdkResult:
    return result


async def _raises(exc: Exception) -> SdkResult:
    raise exc


def _classify(operation, spinner: FakeSpinner | None = None, name: str = "getOrganizations"):
    return asyncio.run(handle_api_call(operation, spinner, "looking up organizations", operation_name=name))


@pytest.fixture
def spinner() -> FakeSpinner:
    return FakeSpinner().start("Looking up organizations...")


class TestClassification:
    def test_success_keeps_spinner_running(self, spinner: FakeSpinner) -> None:
        outcome = _classify(_returns(SdkResult(success=True, status=200, data={"ok": 1})), spinner)
        assert outcome == ApiSuccess(data={"ok": 1})
        assert spinner.is_spinning

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_statuses(self, spinner: FakeSpinner, status: int) -> None:
        result = SdkResult(success=False, status=status, error={"message": "bad key"})
        outcome = _classify(_returns(result), spinner)
        assert isinstance(outcome, ApiAuthError)
        assert outcome.message == AUTH_MESSAGE
        assert not spinner.is_spinning
        assert spinner.events[-1] == ("stop", None)

    def test_not_found_is_input_error(self, spinner: FakeSpinner) -> None:
        result = SdkResult(success=False, status=404, error={"message": "missing"})
        outcome = _classify(_returns(result), spinner, name="getAuditLogEvents")
        assert outcome == ApiInputError(message=not_found_message("getAuditLogEvents"))
        assert "organization slug" in outcome.message
        assert not spinner.is_spinning

    def test_unknown_operation_has_generic_not_found_message(self) -> None:
        assert not_found_message("somethingElse") == "Resource not found (somethingElse)."

    @pytest.mark.parametrize("status", [400, 429, 500, 503])
    def test_other_statuses_are_http_errors(self, spinner: FakeSpinner, status: int) -> None:
        result = SdkResult(success=False, status=status, error={"message": "server says no"})
        outcome = _classify(_returns(result), spinner)
        assert outcome == ApiHttpError(status=status, message="server says no")
        assert spinner.events[-1] == ("fail", "API returned an error: server says no")

    def test_missing_error_message_has_placeholder(self, spinner: FakeSpinner) -> None:
        outcome = _classify(_returns(SdkResult(success=False, status=500)), spinner)
        assert isinstance(outcome, ApiHttpError)
        assert outcome.message == "No error message returned"

    def test_transport_failure(self, spinner: FakeSpinner) -> None:
        cause = NetworkError("connection refused")
        outcome = _classify(_raises(cause), spinner)
        assert isinstance(outcome, ApiHttpError)
        assert outcome.status == TRANSPORT_FAILURE_STATUS
        assert outcome.message == "Failed looking up organizations"
        assert outcome.cause is cause
        assert spinner.events[-1] == ("fail", "Failed looking up organizations")

    def test_no_spinner_is_fine(self) -> None:
        outcome = _classify(_returns(SdkResult(success=False, status=401)), None)
        assert isinstance(outcome, ApiAuthError)


class TestUnwrap:
    def test_success_returns_data(self) -> None:
        assert unwrap_outcome(ApiSuccess(data=[1, 2])) == [1, 2]

    def test_auth(self) -> None:
        with pytest.raises(AuthError) as exc_info:
            unwrap_outcome(ApiAuthError(message=AUTH_MESSAGE))
        assert exc_info.value.hint is not None
        assert "socket login" in exc_info.value.hint

    def test_input(self) -> None:
        with pytest.raises(InputError, match="not found"):
            unwrap_outcome(ApiInputError(message="Organization not found"))

    def test_http_chains_cause(self) -> None:
        cause = NetworkError("connection refused")
        with pytest.raises(HttpError) as exc_info:
            unwrap_outcome(ApiHttpError(status=500, message="Failed fetching", cause=cause))
        assert exc_info.value.status == 500
        assert str(exc_info.value) == "API returned an error (500): Failed fetching"
        assert exc_info.value.__cause__ is cause
