# src/domain/catalog/errors.py


class NotFoundError(LookupError):
    """Unresolved catalog/template lookup."""


class TradeNotFound(NotFoundError):
    def __init__(self, trade_id: str):
        super().__init__(f"trade not found: {trade_id}")
        self.trade_id = trade_id


class JobTypeNotFound(NotFoundError):
    def __init__(self, trade_id: str, job_type_id: str):
        super().__init__(f"job type not found: {trade_id}/{job_type_id}")
        self.trade_id = trade_id
        self.job_type_id = job_type_id


class InvalidSelection(ValueError):
    """Selection references an unknown option or an undeclared choice value."""

    def __init__(self, option_id: str, message: str):
        super().__init__(message)
        self.option_id = option_id


class PersistenceError(RuntimeError):
    """Template store failure (wraps the driver/ORM error)."""
