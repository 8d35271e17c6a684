"""spendwise - personal finance tracking with budgets and savings goals."""

__version__ = "0.1.0"


# Lazy so that importing spendwise.domain does not pull in click
def __getattr__(name):
    if name == "main":
        from spendwise.cli.main import main
        return main
    if name == "Money":
        from spendwise.domain.money import Money
        return Money
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
