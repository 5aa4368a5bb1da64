"""DeleteReview — delete a review and rebuild its product's rating summary."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.domain import techmarket
from techmarket.reviews.review.review import Review
from techmarket.reviews.statistics import refresh_product_rating
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


@techmarket.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        product_id = str(review.product_id)

        repo._dao.delete(review)
        logger.info("Review deleted", review_id=str(command.review_id), product_id=product_id)

        refresh_product_rating(product_id)
