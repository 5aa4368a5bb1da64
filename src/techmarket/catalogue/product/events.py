"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from techmarket.domain import techmarket


@techmarket.event(part_of="Product")
class ProductRatingRefreshed:
    """The product's rating summary was recomputed from its reviews."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    average_rating = Float(required=True)
    total_reviews = Integer(required=True)
    rating_distribution = Text(required=True)
    refreshed_at = DateTime(required=True)
