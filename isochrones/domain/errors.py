"""Typed domain errors for the isochrones request layer.

Every validation failure is raised at the point of detection as one of
these types and is never retried or recovered locally. The first error
aborts the whole batch.

All errors inherit from IsochronesError and can optionally wrap a root
cause exception for debugging. Request errors additionally carry the
numeric error code reported to API clients, the offending parameter and
an HTTP-like status code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional


class ErrorCode(IntEnum):
    """Error codes surfaced to callers of the isochrones endpoint."""

    INVALID_JSON_FORMAT = 3000
    MISSING_PARAMETER = 3001
    INVALID_PARAMETER_FORMAT = 3002
    INVALID_PARAMETER_VALUE = 3003
    PARAMETER_VALUE_EXCEEDS_MAXIMUM = 3004
    FEATURE_NOT_SUPPORTED = 3005
    UNKNOWN_PARAMETER = 3011
    PARAMETER_VALUE_EXCEEDS_MINIMUM = 3012
    UNKNOWN = 3099


BAD_REQUEST = 400
INTERNAL_SERVER_ERROR = 500


@dataclass
class IsochronesError(Exception):
    """Base error for the isochrones domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class RequestError(IsochronesError):
    """An isochrones request could not be processed.

    Attributes:
        parameter: Name of the offending request parameter
        code: Error code reported to the caller
        status_code: HTTP-like status of the failure
    """

    parameter: str = ""
    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: int = BAD_REQUEST

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for error responses."""
        return {"code": int(self.code), "message": self.message}


@dataclass
class InvalidJsonFormatError(RequestError):
    """The request body is not a JSON object."""

    code: ErrorCode = ErrorCode.INVALID_JSON_FORMAT


@dataclass
class UnknownParameterError(RequestError):
    """The request contains a parameter the endpoint does not know."""

    code: ErrorCode = ErrorCode.UNKNOWN_PARAMETER

    @classmethod
    def of(cls, parameter: str) -> UnknownParameterError:
        return cls(f"Unknown parameter '{parameter}'.", parameter=parameter)


@dataclass
class MissingParameterError(RequestError):
    """A required parameter is absent."""

    code: ErrorCode = ErrorCode.MISSING_PARAMETER

    @classmethod
    def of(cls, parameter: str) -> MissingParameterError:
        return cls(f"Parameter '{parameter}' is missing.", parameter=parameter)


@dataclass
class InvalidParameterValueError(RequestError):
    """A parameter value fails enum, range or shape validation.

    Attributes:
        value: The rejected value, if it can be reported
    """

    code: ErrorCode = ErrorCode.INVALID_PARAMETER_VALUE
    value: Optional[str] = None

    @classmethod
    def of(
        cls,
        parameter: str,
        value: Any = None,
        cause: Optional[Exception] = None,
    ) -> InvalidParameterValueError:
        if value is None:
            return cls(
                f"Parameter '{parameter}' has incorrect value or format.",
                cause=cause,
                parameter=parameter,
            )
        return cls(
            f"Parameter '{parameter}' has incorrect value of '{value}'.",
            cause=cause,
            parameter=parameter,
            value=str(value),
        )


@dataclass
class ParameterOutOfRangeError(RequestError):
    """A parameter violates a configured or derived limit.

    Attributes:
        value: The observed value
        limit: The limit that was violated
    """

    value: Optional[str] = None
    limit: Optional[str] = None


@dataclass
class ParameterExceedsMaximumError(ParameterOutOfRangeError):
    """A parameter is above its allowed maximum."""

    code: ErrorCode = ErrorCode.PARAMETER_VALUE_EXCEEDS_MAXIMUM

    @classmethod
    def of(cls, parameter: str, value: Any, limit: Any) -> ParameterExceedsMaximumError:
        return cls(
            f"Parameter '{parameter}={value}' is out of range. "
            f"Maximum possible value is {limit}.",
            parameter=parameter,
            value=str(value),
            limit=str(limit),
        )


@dataclass
class ParameterExceedsMinimumError(ParameterOutOfRangeError):
    """A derived quantity of a parameter violates its bound.

    Raised when an interval produces more isochrones than allowed.
    """

    code: ErrorCode = ErrorCode.PARAMETER_VALUE_EXCEEDS_MINIMUM


@dataclass
class FeatureNotSupportedError(RequestError):
    """The request asks for a capability disabled on this service."""

    code: ErrorCode = ErrorCode.FEATURE_NOT_SUPPORTED


@dataclass
class InternalServerError(RequestError):
    """Unexpected failure while assembling the batch.

    The underlying cause is kept for logs but never reported to clients.
    """

    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: int = INTERNAL_SERVER_ERROR

    def __str__(self) -> str:
        return self.message


@dataclass
class EngineError(IsochronesError):
    """The isochrone computation engine failed.

    Attributes:
        engine: Name of the engine adapter that failed
        traveller_id: Identifier of the traveller being computed
    """

    engine: str = ""
    traveller_id: Optional[str] = None


@dataclass
class ConfigurationError(IsochronesError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
