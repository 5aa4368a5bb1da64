"""CreateReview — submit a new product review.

The product must exist. The product's rating summary is rebuilt in the same
unit of work as the new review.
"""

import json

from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.catalogue.product.product import Product
from techmarket.domain import techmarket
from techmarket.reviews.review.review import Review
from techmarket.reviews.statistics import refresh_product_rating
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Review")
class CreateReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=100)
    content = Text(required=True)
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings
    verified_purchase = Boolean(default=False)


@techmarket.command_handler(part_of=Review)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        review = Review.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            rating=command.rating,
            title=command.title,
            content=command.content,
            pros=json.loads(command.pros) if command.pros else None,
            cons=json.loads(command.cons) if command.cons else None,
            verified_purchase=command.verified_purchase,
        )
        current_domain.repository_for(Review).add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            rating=command.rating,
        )

        refresh_product_rating(command.product_id)
        return str(review.id)
