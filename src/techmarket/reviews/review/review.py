"""Review aggregate — a user's rating and write-up of a product.

Reviews carry a 1-5 star rating, a title, free-text content, optional lists
of pros and cons, a verified-purchase flag and a helpful-votes counter that
never drops below zero. The product rating summary is derived from the set of
reviews (see ``techmarket.reviews.statistics``); nothing here writes to the
product.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from techmarket.domain import techmarket
from techmarket.reviews.review.events import HelpfulVotesChanged, ReviewEdited, ReviewSubmitted
from techmarket.utils.query import fetch_all

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MAX_POINTS = 10


def _clean_points(points):
    return [point.strip() for point in points] if points else []


@techmarket.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)

    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(required=True, min_length=3, max_length=100)
    content = Text(required=True)
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings

    verified_purchase = Boolean(default=False)
    helpful_votes = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def content_length_within_bounds(self):
        if self.content is not None and not 10 <= len(self.content.strip()) <= 1000:
            raise ValidationError({"content": ["Review content must be between 10 and 1000 characters"]})

    @invariant.post
    def pros_and_cons_within_limits(self):
        for field_name, points in (("pros", self.pros_list), ("cons", self.cons_list)):
            if len(points) > MAX_POINTS:
                raise ValidationError({field_name: [f"You can specify up to {MAX_POINTS} {field_name} points"]})
            if any(not 2 <= len(point) <= 100 for point in points):
                raise ValidationError({field_name: ["Each point must be between 2 and 100 characters"]})

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    @property
    def pros_list(self):
        return json.loads(self.pros) if self.pros else []

    @property
    def cons_list(self):
        return json.loads(self.cons) if self.cons else []

    @property
    def has_pros_and_cons(self):
        return bool(self.pros_list) and bool(self.cons_list)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        product_id,
        user_id,
        rating,
        title,
        content,
        pros=None,
        cons=None,
        verified_purchase=False,
    ):
        """Submit a new review with zero helpful votes."""
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            title=title.strip() if title else title,
            content=content.strip() if content else content,
            pros=json.dumps(_clean_points(pros)),
            cons=json.dumps(_clean_points(cons)),
            verified_purchase=bool(verified_purchase),
            helpful_votes=0,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
                title=review.title,
                verified_purchase=review.verified_purchase,
                submitted_at=now,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(
        self,
        rating=_UNSET,
        title=_UNSET,
        content=_UNSET,
        pros=_UNSET,
        cons=_UNSET,
    ):
        """Apply a partial update. Fields left unset keep their value."""
        now = datetime.now(UTC)

        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if title is not _UNSET:
                self.title = title.strip()
            if content is not _UNSET:
                self.content = content.strip()
            if pros is not _UNSET:
                self.pros = json.dumps(_clean_points(pros))
            if cons is not _UNSET:
                self.cons = json.dumps(_clean_points(cons))
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=rating if rating is not _UNSET else None,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Helpful votes
    # -------------------------------------------------------------------
    def record_helpful_vote(self, increment):
        """Add one helpful vote, or take one away when ``increment`` is false."""
        if increment:
            new_count = self.helpful_votes + 1
        else:
            if self.helpful_votes <= 0:
                raise ValidationError({"helpful_votes": ["Helpful votes cannot go below 0"]})
            new_count = self.helpful_votes - 1

        now = datetime.now(UTC)
        with atomic_change(self):
            self.helpful_votes = new_count
            self.updated_at = now

        self.raise_(
            HelpfulVotesChanged(
                review_id=str(self.id),
                helpful_votes=new_count,
                changed_at=now,
            )
        )
        return new_count


@techmarket.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id):
        """Every review of a product, read from the store."""
        return fetch_all(self._dao.query.filter(product_id=str(product_id)))

    def matching(self, product_id=None, min_rating=None, max_rating=None, verified_purchase=None):
        """Reviews matching the filters the store can evaluate directly."""
        filters = {}
        if product_id:
            filters["product_id"] = str(product_id)
        if min_rating is not None:
            filters["rating__gte"] = min_rating
        if max_rating is not None:
            filters["rating__lte"] = max_rating
        if verified_purchase is not None:
            filters["verified_purchase"] = verified_purchase

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return fetch_all(query)
