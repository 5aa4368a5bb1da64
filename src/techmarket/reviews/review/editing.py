"""UpdateReview — partial update of a review.

Only fields present in the command change. When the rating is part of the
update the product's rating summary is rebuilt afterwards. Any caller may edit
any review; ownership is not part of this API.
"""

import json

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.domain import techmarket
from techmarket.reviews.review.review import Review
from techmarket.reviews.statistics import refresh_product_rating
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    rating = Integer()
    title = String(max_length=100)
    content = Text()
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings


@techmarket.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        kwargs = {}
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.title is not None:
            kwargs["title"] = command.title
        if command.content is not None:
            kwargs["content"] = command.content
        if command.pros is not None:
            kwargs["pros"] = json.loads(command.pros)
        if command.cons is not None:
            kwargs["cons"] = json.loads(command.cons)

        review.edit(**kwargs)
        repo.add(review)

        logger.info("Review updated", review_id=str(review.id), fields=sorted(kwargs))

        if "rating" in kwargs:
            refresh_product_rating(review.product_id)
