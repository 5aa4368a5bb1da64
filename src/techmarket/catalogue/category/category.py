"""Category aggregate — flat product grouping."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from techmarket.domain import techmarket
from techmarket.utils.query import fetch_all

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@techmarket.aggregate
class Category:
    name = String(required=True, min_length=2, max_length=50)
    description = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, description=None):
        now = datetime.now(UTC)
        return cls(
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name=_UNSET, description=_UNSET):
        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        self.updated_at = datetime.now(UTC)


@techmarket.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name):
        """Return the category with this exact name, or None."""
        results = self._dao.query.filter(name=name).all().items
        return results[0] if results else None

    def list_all(self):
        return sorted(fetch_all(self._dao.query), key=lambda c: c.name.lower())
