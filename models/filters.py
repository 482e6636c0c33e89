"""
models/filters.py
-----------------
Ephemeral search / category / sort state for the transaction history.
"""

from dataclasses import dataclass, field

SORT_FIELDS = ("date", "amount", "title")
SORT_ORDERS = ("asc", "desc")


@dataclass
class ViewFilters:
    """
    What the user currently wants to see.

    Attributes:
        search: Free-text query; empty means no search filter.
        categories: Selected categories; empty means all categories.
        sort_field: One of 'date', 'amount', 'title'.
        sort_order: 'asc' or 'desc'.
    """
    search: str = ""
    categories: set[str] = field(default_factory=set)
    sort_field: str = "date"
    sort_order: str = "desc"

    def toggle_category(self, category: str) -> None:
        """Select the category if unselected, otherwise unselect it."""
        if category in self.categories:
            self.categories.discard(category)
        else:
            self.categories.add(category)

    def clear(self) -> None:
        """Reset search and category selection. Sorting is kept."""
        self.search = ""
        self.categories.clear()

    def is_active(self) -> bool:
        return bool(self.search or self.categories)
