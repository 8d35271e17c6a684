"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidArgumentError(DomainError):
    """A required argument was missing or of the wrong kind."""


class InvalidStateError(DomainError):
    """Operation not permitted in the entity's current status."""


class DivisionByZeroError(DomainError):
    """Percentage computed against a zero denominator."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the given owner."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or stale writes."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def notification_not_found(notification_id: int) -> str:
    """Return message for missing notification."""
    return f"Notification {notification_id} not found"


def stale_write(entity: str, entity_id: int) -> str:
    """Return message when an aggregate was modified concurrently."""
    return (
        f"{entity} {entity_id} was modified by another session. "
        "Reload it and try again."
    )


def category_delete_blocked(
    category_id: int, transaction_count: int, budget_count: int
) -> str:
    """Return message when a category still has transactions or budgets."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if budget_count > 0:
        parts.append(f"{budget_count} budget{'s' if budget_count != 1 else ''}")
    return (
        f"Cannot delete category {category_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
