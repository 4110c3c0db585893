"""Core layer — routing, process-proxy rules and API outcome triage.

Rules
-----
* No ``print()`` calls.
* No filesystem, network or process I/O.
* No imports from ``cli`` or ``infra``.
* Collaborators are reached through :mod:`socket_cli.core.protocols`.
"""

from socket_cli.core.api_call import handle_api_call, handle_unsuccessful_api_response, unwrap_outcome
from socket_cli.core.models import (
    ApiAuthError,
    ApiHttpError,
    ApiInputError,
    ApiOutcome,
    ApiSuccess,
    ProcessProxySpec,
    SdkResult,
)
from socket_cli.core.proxy import ProcessProxy
from socket_cli.core.registry import CommandContext, Group, Leaf

__all__: list[str] = [
    "ApiAuthError",
    "ApiHttpError",
    "ApiInputError",
    "ApiOutcome",
    "ApiSuccess",
    "CommandContext",
    "Group",
    "Leaf",
    "ProcessProxy",
    "ProcessProxySpec",
    "SdkResult",
    "handle_api_call",
    "handle_unsuccessful_api_response",
    "unwrap_outcome",
]
