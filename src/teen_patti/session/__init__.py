"""Multi-hand session runners."""

from teen_patti.session.table_session import SessionResult, TableSession

__all__ = ["SessionResult", "TableSession"]
