"""Query-related exceptions."""

from typing import List

from .base import NetflixInsightError


class QueryError(NetflixInsightError):
    """Base class for query execution errors."""

    pass


class UnknownQueryError(QueryError):
    """Raised when a query name is not registered."""

    def __init__(self, name: str, available: List[str]):
        super().__init__(
            f"Unknown query: {name}",
            details={"query": name, "available": ", ".join(available)},
        )
        self.name = name
        self.available = available


class DivisionGuardError(QueryError):
    """Raised by the ratio helper when asked to divide by zero.

    Queries filter out zero denominators first, so this never reaches a caller.
    """

    def __init__(self, numerator: float, context: str):
        super().__init__(
            f"Zero denominator in {context}",
            details={"numerator": str(numerator), "context": context},
        )
        self.numerator = numerator
        self.context = context
