"""API call layer — classify one remote call into an :data:`ApiOutcome`.

Every data-fetching subcommand funnels its SDK call through
:func:`handle_api_call`, so HTTP triage (status → error kind, wording,
progress-indicator lifecycle) lives in exactly one place.

Guarantees
----------
* A failed or rejected call never yields an :class:`ApiSuccess`.
* On any error outcome the progress indicator has been stopped.
* On success the indicator is left running for the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any

from socket_cli.core.models import (
    ApiAuthError,
    ApiHttpError,
    ApiInputError,
    ApiOutcome,
    ApiSuccess,
    SdkResult,
)
from socket_cli.core.protocols import ProgressIndicator
from socket_cli.exceptions import AuthError, HttpError, InputError

logger = logging.getLogger(__name__)

TRANSPORT_FAILURE_STATUS: int = 500
"""Status reported when no HTTP response was received at all."""

AUTH_MESSAGE = "User must be authenticated to run this command."

NOT_FOUND_MESSAGES: dict[str, str] = {
    "getOrganizations": "No organizations found for this API key.",
    "getOrgAnalytics": "No analytics data found for this organization.",
    "getRepoAnalytics": "Repository not found or it has no analytics data.",
    "getAuditLogEvents": "Organization not found; check the organization slug.",
    "searchDependencies": "No dependencies found for this organization.",
    "createDependenciesSnapshot": "Organization or repository not found.",
    "getOrgDiffScan": "Full scan not found; check the organization slug and scan IDs.",
    "getIssuesByNPMPackage": "Package not found in the npm registry.",
    "getScoreByNPMPackage": "Package not found in the npm registry.",
    "getOrgRepoList": "Organization not found; check the organization slug.",
    "getOrgRepo": "Repository not found; check the organization slug and repository name.",
    "createOrgRepo": "Organization not found; check the organization slug.",
    "updateOrgRepo": "Repository not found; check the organization slug and repository name.",
    "deleteOrgRepo": "Repository not found; check the organization slug and repository name.",
    "getOrgFullScanList": "Organization not found; check the organization slug.",
    "getOrgFullScan": "Scan not found; check the organization slug and scan ID.",
    "getOrgFullScanMetadata": "Scan not found; check the organization slug and scan ID.",
    "deleteOrgFullScan": "Scan not found; check the organization slug and scan ID.",
    "getQuota": "Quota information not found.",
}


def not_found_message(operation_name: str) -> str:
    """Resource-specific wording for a 404 returned by *operation_name*."""
    return NOT_FOUND_MESSAGES.get(operation_name, f"Resource not found ({operation_name}).")


def _stop(progress: ProgressIndicator | None, failure_text: str | None = None) -> None:
    if progress is None:
        return
    if failure_text is not None:
        progress.fail(failure_text)
    else:
        progress.stop()


# ---------------------------------------------------------------------------
# Status triage
# ---------------------------------------------------------------------------

def handle_unsuccessful_api_response(
    operation_name: str,
    result: SdkResult,
    progress: ProgressIndicator | None = None,
) -> ApiOutcome:
    """Map a ``success=False`` SDK result onto an error outcome.

    * 401 / 403 → :class:`ApiAuthError`
    * 404       → :class:`ApiInputError`
    * otherwise → :class:`ApiHttpError` carrying the status
    """
    message = result.error_message
    logger.debug("%s failed with status %d: %s", operation_name, result.status, message)

    if result.status in (401, 403):
        _stop(progress)
        return ApiAuthError(message=AUTH_MESSAGE)
    if result.status == 404:
        _stop(progress)
        return ApiInputError(message=not_found_message(operation_name))

    _stop(progress, f"API returned an error: {message}")
    return ApiHttpError(status=result.status, message=message)


async def handle_api_call(
    operation: Awaitable[SdkResult],
    progress: ProgressIndicator | None,
    description: str,
    *,
    operation_name: str = "",
) -> ApiOutcome:
    """Await an in-flight SDK *operation* and classify what came back.

    Parameters
    ----------
    operation:
        The SDK coroutine, already created by the caller.
    progress:
        Indicator to stop on failure; may be ``None`` for silent calls.
    description:
        Human wording of the call, e.g. ``"looking up organizations"``.
    operation_name:
        SDK operation identifier used to pick a 404 message.
    """
    try:
        result = await operation
    except Exception as exc:  # noqa: BLE001
        logger.debug("transport failure while %s", description, exc_info=True)
        _stop(progress, f"Failed {description}")
        return ApiHttpError(
            status=TRANSPORT_FAILURE_STATUS,
            message=f"Failed {description}",
            cause=exc,
        )

    if not result.success:
        return handle_unsuccessful_api_response(operation_name or description, result, progress)
    return ApiSuccess(data=result.data)


# ---------------------------------------------------------------------------
# Outcome consumption
# ---------------------------------------------------------------------------

def unwrap_outcome(outcome: ApiOutcome) -> Any:
    """Return the payload of a success, or raise the matching typed error."""
    if isinstance(outcome, ApiSuccess):
        return outcome.data
    if isinstance(outcome, ApiAuthError):
        raise AuthError(outcome.message)
    if isinstance(outcome, ApiInputError):
        raise InputError(outcome.message)
    error = HttpError(outcome.status, outcome.message)
    if outcome.cause is not None:
        raise error from outcome.cause
    raise error
