"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Socket API, the npm registry,
the filesystem and child processes.  Every raw third-party exception
must be caught here and re-raised as a
:class:`~socket_cli.exceptions.SocketCliError` subclass (or returned as
an :class:`~socket_cli.core.models.SdkResult`).

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""
