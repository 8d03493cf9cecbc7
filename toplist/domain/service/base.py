"""Base service class for domain services."""

from contextlib import contextmanager
from typing import Any, ClassVar, Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError

from toplist.domain.error import CollaboratorUnavailableError


class Service:
    """Base class for all domain services.

    Spans opened through :meth:`span` are named ``<span_prefix>.<operation>``,
    so traces group by service. Storage calls made inside :meth:`_storage`
    surface failures as :class:`CollaboratorUnavailableError`.
    """

    span_prefix: ClassVar[str] = "service"
    collaborator: ClassVar[str] = "storage"

    def span(self, operation: str, **attributes: Any) -> logfire.LogfireSpan:
        """Open a logfire span for one service operation."""
        return logfire.span(f"{self.span_prefix}.{operation}", **attributes)

    @contextmanager
    def _storage(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "{collaborator} unavailable",
                collaborator=self.collaborator,
                operation=operation,
                error=str(e),
            )
            raise CollaboratorUnavailableError(self.collaborator, operation) from e
