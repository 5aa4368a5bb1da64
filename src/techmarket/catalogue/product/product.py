"""Product aggregate — catalogue item carrying a denormalized rating summary.

The rating summary (``average_rating``, ``total_reviews``,
``rating_distribution``) is written only through ``apply_rating_summary``,
which the review statistics module calls after every review create,
rating change or delete. Product endpoints never touch these fields.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from techmarket.catalogue.product.events import ProductRatingRefreshed
from techmarket.domain import techmarket
from techmarket.utils.query import fetch_all

_UNSET = object()

RATING_VALUES = (1, 2, 3, 4, 5)


def empty_distribution():
    return {str(star): 0 for star in RATING_VALUES}


@techmarket.aggregate
class Product:
    name = String(required=True, min_length=2, max_length=100)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category_id = Identifier()
    attributes = Text()  # JSON object of scalar values
    stock_count = Integer(default=0, min_value=0)

    # Rating summary
    average_rating = Float(default=0.0)
    total_reviews = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def distribution_must_match_total(self):
        if self.rating_distribution is None:
            return
        counts = json.loads(self.rating_distribution)
        if sum(counts.values()) != (self.total_reviews or 0):
            raise ValidationError({"rating_distribution": ["Rating distribution does not add up to total reviews"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        category_id=None,
        attributes=None,
        stock_count=0,
    ):
        now = datetime.now(UTC)
        return cls(
            name=name,
            description=description,
            price=price,
            category_id=category_id,
            attributes=json.dumps(attributes) if attributes else None,
            stock_count=stock_count,
            average_rating=0.0,
            total_reviews=0,
            rating_distribution=json.dumps(empty_distribution()),
            created_at=now,
            updated_at=now,
        )

    @property
    def attribute_map(self):
        return json.loads(self.attributes) if self.attributes else {}

    @property
    def distribution(self):
        """Rating distribution keyed by star value, all five stars present."""
        counts = json.loads(self.rating_distribution) if self.rating_distribution else {}
        return {star: counts.get(str(star), 0) for star in RATING_VALUES}

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        category_id=_UNSET,
        attributes=_UNSET,
        stock_count=_UNSET,
    ):
        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        if price is not _UNSET:
            self.price = price
        if category_id is not _UNSET:
            self.category_id = category_id
        if attributes is not _UNSET:
            self.attributes = json.dumps(attributes) if attributes else None
        if stock_count is not _UNSET:
            self.stock_count = stock_count
        self.updated_at = datetime.now(UTC)

    def apply_rating_summary(self, total_reviews, average_rating, rating_distribution):
        """Overwrite all rating summary fields in one step."""
        counts = {str(star): rating_distribution.get(star, 0) for star in RATING_VALUES}
        now = datetime.now(UTC)

        with atomic_change(self):
            self.total_reviews = total_reviews
            self.average_rating = average_rating
            self.rating_distribution = json.dumps(counts)
            self.updated_at = now

        self.raise_(
            ProductRatingRefreshed(
                product_id=str(self.id),
                average_rating=average_rating,
                total_reviews=total_reviews,
                rating_distribution=self.rating_distribution,
                refreshed_at=now,
            )
        )


@techmarket.repository(part_of=Product)
class ProductRepository:
    def find_many(self, product_ids):
        """Products for the given ids, in the order of ``product_ids``; unknown ids are skipped."""
        wanted = [str(pid) for pid in product_ids]
        if not wanted:
            return []
        found = {str(p.id): p for p in fetch_all(self._dao.query.filter(id__in=wanted))}
        return [found[pid] for pid in wanted if pid in found]

    def search(self, category_id=None, min_price=None, max_price=None):
        filters = {}
        if category_id:
            filters["category_id"] = category_id
        if min_price is not None:
            filters["price__gte"] = min_price
        if max_price is not None:
            filters["price__lte"] = max_price

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return fetch_all(query)
