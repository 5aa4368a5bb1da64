"""SetHelpfulVotes — add or take away one helpful vote on a review.

Taking a vote away from a review with zero votes is rejected without a write.
"""

from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.domain import techmarket
from techmarket.reviews.review.review import Review


@techmarket.command(part_of="Review")
class SetHelpfulVotes:
    review_id = Identifier(required=True)
    increment = Boolean(required=True)


@techmarket.command_handler(part_of=Review)
class SetHelpfulVotesHandler:
    @handle(SetHelpfulVotes)
    def set_helpful_votes(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        helpful_votes = review.record_helpful_vote(increment=command.increment)

        repo.add(review)
        return helpful_votes
