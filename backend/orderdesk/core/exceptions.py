"""
Exception hierarchy for OrderDesk

Data access raises DataAccessError subclasses. Handlers wrap those into
RetrievalError / TransactionError, and the request router turns every
OrderDeskError into a response envelope.

Author: TM3
Date: 2026-10-12
"""
from typing import Dict, Optional


class OrderDeskError(Exception):
    """Base exception for all OrderDesk errors"""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(OrderDeskError):
    """Settings are missing or invalid"""


class ValidationError(OrderDeskError):
    """Request parameters are missing or malformed (no store access attempted)"""


class NotFoundError(OrderDeskError):
    """A referenced customer or product does not exist"""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


# ============================================================================
# Data access errors
# ============================================================================

class DataAccessError(OrderDeskError):
    """Base class for failures talking to the relational store"""


class ConnectivityError(DataAccessError):
    """The store cannot be reached or the connection dropped"""


class AuthenticationError(ConnectivityError):
    """The store rejected the supplied credentials"""


class QueryError(DataAccessError):
    """A statement failed (malformed SQL, bad data, ...)"""


class ConstraintError(QueryError):
    """The store rejected a write because of an integrity constraint"""


# ============================================================================
# Handler-level errors
# ============================================================================

class RetrievalError(OrderDeskError):
    """A read handler failed; the DataAccessError is attached as __cause__"""

    def __init__(self, entity: str, cause: Optional[Exception] = None):
        super().__init__(f"Failed to retrieve {entity}")
        self.entity = entity
        self.cause = cause


class TransactionError(OrderDeskError):
    """The order transaction failed and was rolled back"""

    def __init__(self, message: str = "Failed to create order", cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
