"""
Module 01 - Schemas
File: __init__.py

Purpose: Export error models and exceptions.
The proof wire schema lives in smtree.schemas.proof.
"""

from .errors import (
    ConfigurationException,
    ErrorCodes,
    InvalidKeyException,
    InvalidProofException,
    InvalidValueException,
    SMTError,
    SMTException,
    StoreException,
    UnsupportedOperationException,
)

__all__ = [
    "ConfigurationException",
    "ErrorCodes",
    "InvalidKeyException",
    "InvalidProofException",
    "InvalidValueException",
    "SMTError",
    "SMTException",
    "StoreException",
    "UnsupportedOperationException",
]
