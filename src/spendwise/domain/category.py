"""Category domain service."""

import re
from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.entities import Category, CategoryType
from spendwise.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_name_not_found,
    category_not_found,
)
from spendwise.domain.validation import require_name, require_optional_text

DEFAULT_COLOR = "#007bff"
_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# (name, type, color, description)
DEFAULT_CATEGORIES = [
    ("Salary", CategoryType.INCOME, "#28a745", "Regular income from work"),
    ("Freelance", CategoryType.INCOME, "#20c997", "Income from freelance work"),
    ("Investment", CategoryType.INCOME, "#6f42c1", "Investment returns"),
    ("Gifts", CategoryType.INCOME, "#e83e8c", "Received gifts"),
    ("Other Income", CategoryType.INCOME, "#6c757d", "Other income sources"),
    ("Food & Dining", CategoryType.EXPENSE, "#fd7e14", "Restaurants and groceries"),
    ("Transportation", CategoryType.EXPENSE, "#007bff", "Fuel and public transport"),
    ("Shopping", CategoryType.EXPENSE, "#dc3545", "Clothing and electronics"),
    ("Entertainment", CategoryType.EXPENSE, "#6610f2", "Movies, concerts and hobbies"),
    ("Bills & Utilities", CategoryType.EXPENSE, "#17a2b8", "Electricity, internet and phone"),
    ("Healthcare", CategoryType.EXPENSE, "#20c997", "Doctor visits and medicine"),
    ("Education", CategoryType.EXPENSE, "#6f42c1", "Tuition and books"),
    ("Rent/Mortgage", CategoryType.EXPENSE, "#e83e8c", "Housing costs"),
    ("Savings", CategoryType.EXPENSE, "#28a745", "Contributions to savings"),
    ("Other Expenses", CategoryType.EXPENSE, "#6c757d", "Miscellaneous expenses"),
]


def _validate_color(color: Optional[str]) -> str:
    if color is None or not color.strip():
        return DEFAULT_COLOR
    color = color.strip()
    if not _COLOR_PATTERN.match(color):
        raise ValidationError(f"Invalid color '{color}'. Expected a hex value like #1a2b3c")
    return color


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        category_type: CategoryType,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a category.

        Args:
            name: Unique category name
            category_type: INCOME or EXPENSE
            color: Hex display color (defaults to #007bff)
            description: Optional description

        Returns:
            Category ID

        Raises:
            ValidationError: If any value is invalid
            ConflictError: If a category with this name already exists
        """
        name = require_name(name, "Category name")
        color = _validate_color(color)
        description = require_optional_text(description, "Description")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category with name '{name}' already exists")

        return self.db.create_category(
            name=name, category_type=category_type, color=color, description=description
        )

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return self.db.get_category_by_name(name)

    def require_category_by_name(self, name: str) -> Category:
        """Get category by name, raising if missing.

        Raises:
            NotFoundError: If no category has this name
        """
        category = self.db.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self, category_type: Optional[CategoryType] = None) -> list[Category]:
        """List categories ordered by name.

        Args:
            category_type: Optional type to filter by

        Returns:
            List of categories
        """
        return self.db.list_categories(category_type=category_type)

    def update_category(
        self,
        category_id: int,
        name: str,
        category_type: CategoryType,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update a category.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If the new name is taken by another category
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        name = require_name(name, "Category name")
        color = _validate_color(color)
        description = require_optional_text(description, "Description")
        existing = self.db.get_category_by_name(name)
        if existing is not None and existing.id != category_id:
            raise ConflictError(f"Category with name '{name}' already exists")

        self.db.update_category(
            category_id,
            name=name,
            category_type=category_type,
            color=color,
            description=description,
        )

    def delete_category(self, category_id: int) -> None:
        """Delete a category that nothing references.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If transactions or budgets still use it
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        transaction_count = self.db.get_category_transaction_count(category_id)
        budget_count = self.db.get_category_budget_count(category_id)
        if transaction_count > 0 or budget_count > 0:
            raise DependencyError(
                category_delete_blocked(category_id, transaction_count, budget_count)
            )

        self.db.delete_category(category_id)

    def initialize_default_categories(self) -> int:
        """Create the default category set when no categories exist.

        Returns:
            Number of categories created
        """
        if self.db.list_categories():
            return 0
        for name, category_type, color, description in DEFAULT_CATEGORIES:
            self.create_category(
                name=name, category_type=category_type, color=color, description=description
            )
        return len(DEFAULT_CATEGORIES)
