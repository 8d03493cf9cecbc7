"""Domain layer errors."""

from datetime import datetime, timedelta

from toplist.domain.model.eligibility import ceil_hours


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class VoteCooldownActiveError(BusinessRuleViolationError):
    """Raised when an identity votes again before its cooldown has elapsed."""

    def __init__(self, retry_after: datetime, remaining: timedelta):
        self.retry_after = retry_after
        self.remaining = remaining
        self.remaining_hours_ceil = ceil_hours(remaining)
        plural = "" if self.remaining_hours_ceil == 1 else "s"
        super().__init__(
            f"You can vote again in {self.remaining_hours_ceil} hour{plural}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ServerNotFoundError(NotFoundError):
    """Raised when voting on a server that does not exist."""

    def __init__(self, server_id: str):
        super().__init__("Server", server_id)


class CollaboratorUnavailableError(DomainError):
    """Raised when storage or another collaborator fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, collaborator: str, operation: str):
        self.collaborator = collaborator
        self.operation = operation
        super().__init__(f"{collaborator} unavailable during {operation}")
