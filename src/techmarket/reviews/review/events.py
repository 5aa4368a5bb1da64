"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from techmarket.domain import techmarket


@techmarket.event(part_of="Review")
class ReviewSubmitted:
    """A user submitted a review for a product."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True)
    verified_purchase = Boolean(default=False)
    submitted_at = DateTime(required=True)


@techmarket.event(part_of="Review")
class ReviewEdited:
    """Review content changed; ``rating`` is set only when it was part of the edit."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer()
    edited_at = DateTime(required=True)


@techmarket.event(part_of="Review")
class HelpfulVotesChanged:
    __version__ = "v1"

    review_id = Identifier(required=True)
    helpful_votes = Integer(required=True)
    changed_at = DateTime(required=True)
