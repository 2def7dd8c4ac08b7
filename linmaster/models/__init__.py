"""
Data models for LIN node configuration and diagnostics.

This module contains Pydantic models for:

- Node attributes (NAD, product identification, timing parameters)
- Read By Identifier identifiers
- Product identification and serial number records
"""

from linmaster.models.records import (
    DiagnosticIdentifier,
    IdentifierKind,
    NodeAttributes,
    ProductId,
    SerialNumber,
)

__all__ = [
    # Configuration
    "NodeAttributes",
    # Identifiers
    "DiagnosticIdentifier",
    "IdentifierKind",
    # Records
    "ProductId",
    "SerialNumber",
]
