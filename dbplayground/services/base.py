"""
Base service class providing common functionality for all services.
"""

from typing import Any, Dict, NoReturn, Optional

from ..core.exceptions import DatabaseError
from ..core.logging import get_logger
from ..infrastructure.db.connection import DatabaseManager


class BaseService:
    """Base class for services backed by the pooled database."""

    def __init__(self, database: DatabaseManager):
        self.database = database
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log service operation."""
        log_msg = f"Service operation: {operation}"
        if details:
            log_msg += f" - Details: {details}"
        self.logger.info(log_msg)

    def handle_database_error(
        self, error: DatabaseError, message: str, include_details: bool = True
    ) -> NoReturn:
        """Log an engine failure and re-raise it under an operation-level message.

        The engine's own text stays in ``details`` unless ``include_details`` is off.
        """
        self.logger.error(f"{message}: {error.details}")
        raise type(error)(
            message=message,
            operation=error.operation,
            details=error.details if include_details else None,
        ) from error
