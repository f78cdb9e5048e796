"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for the sparse Merkle tree and its node stores.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Verification mismatches are NOT errors: verify functions return False.
Exceptions here cover store failures, capability gaps, malformed
inputs and bad configuration.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Storage Errors
    STORE_ERROR = "STORE_ERROR"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"

    # Input Errors
    INVALID_KEY = "INVALID_KEY"
    INVALID_VALUE = "INVALID_VALUE"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SMTError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a process boundary (CLI JSON output,
    logs shipped elsewhere) without carrying a live exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.STORE_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SMTException":
        """Convert this error model to a raised exception."""
        return SMTException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SMTException(Exception):
    """
    Base exception for all sparse Merkle tree errors.

    This exception carries structured error information and can be
    converted to/from SMTError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "SMT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SMTError:
        """Convert this exception to an SMTError model."""
        return SMTError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class StoreException(SMTException):
    """Exception raised when the backing node store fails a get/set/remove."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if operation:
            full_details["operation"] = operation
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.STORE_ERROR,
            details=full_details,
            retryable=retryable,
        )


class UnsupportedOperationException(SMTException):
    """Exception raised when a backend lacks a capability (e.g. read-only set)."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if operation:
            full_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_OPERATION,
            details=full_details,
            retryable=False,
        )


class InvalidKeyException(SMTException):
    """Exception raised when a key cannot be mapped to a 256-bit tree path."""

    def __init__(
        self,
        message: str,
        length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if length is not None:
            full_details["length"] = length
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_KEY,
            details=full_details,
            retryable=False,
        )


class InvalidValueException(SMTException):
    """Exception raised when a value is not a byte string."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_VALUE,
            details=details,
            retryable=False,
        )


class InvalidProofException(SMTException):
    """Exception raised when a proof is structurally malformed (decode time)."""

    def __init__(
        self,
        message: str,
        depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if depth is not None:
            full_details["depth"] = depth
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(SMTException):
    """Exception raised for unknown hash algorithms, store backends, etc."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if setting:
            full_details["setting"] = setting
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )
