from .row_repository import RowRepository

__all__ = ["RowRepository"]
