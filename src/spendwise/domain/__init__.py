"""Domain layer for spendwise application."""

__all__ = [
    "UserService",
    "CategoryService",
    "TransactionService",
    "BudgetService",
    "GoalService",
    "NotificationService",
    "ReportService",
]

_SERVICE_MODULES = {
    "UserService": "spendwise.domain.user",
    "CategoryService": "spendwise.domain.category",
    "TransactionService": "spendwise.domain.transaction",
    "BudgetService": "spendwise.domain.budget",
    "GoalService": "spendwise.domain.goal",
    "NotificationService": "spendwise.domain.notification",
    "ReportService": "spendwise.domain.report",
}


def __getattr__(name):
    # Services import the database layer, which imports domain entities.
    if name in _SERVICE_MODULES:
        from importlib import import_module

        return getattr(import_module(_SERVICE_MODULES[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
