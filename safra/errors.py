"""Service-level error taxonomy.

Services raise these; routes turn them into HTTP responses carrying
``status_code`` and the user-facing ``message``.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
	"""Base class: a failure with a user-facing message and an HTTP status."""

	status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

	def __init__(self, message: str, status_code: int | None = None) -> None:
		super().__init__(message)
		self.message = message
		if status_code is not None:
			self.status_code = status_code


class ValidationError(ServiceError):
	"""Missing or malformed input."""

	status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
	"""Unique constraint or referential-integrity conflict."""

	status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
	status_code = status.HTTP_404_NOT_FOUND


class AuthError(ServiceError):
	"""Credential mismatch."""

	status_code = status.HTTP_400_BAD_REQUEST


class AssociationError(ServiceError):
	"""A record referenced by natural key does not exist."""

	status_code = status.HTTP_400_BAD_REQUEST


class InternalError(ServiceError):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
