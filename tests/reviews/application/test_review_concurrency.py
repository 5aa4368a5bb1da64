"""Application tests for optimistic concurrency on reviews."""

import pytest
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from techmarket.reviews.review.review import Review
from techmarket.reviews.review.voting import SetHelpfulVotes


class TestStaleReviewWrites:
    def test_concurrent_upvote_from_stale_copy_is_rejected(self, make_product, make_review):
        review_id = make_review(make_product())

        repo = current_domain.repository_for(Review)
        fresh = repo.get(review_id)
        stale = repo.get(review_id)

        fresh.record_helpful_vote(True)
        repo.add(fresh)

        stale.record_helpful_vote(True)
        with pytest.raises(ExpectedVersionError):
            repo.add(stale)

        assert repo.get(review_id).helpful_votes == 1

    def test_sequential_votes_through_handler_all_count(self, make_product, make_review):
        review_id = make_review(make_product())

        for _ in range(3):
            current_domain.process(SetHelpfulVotes(review_id=review_id, increment=True), asynchronous=False)

        assert current_domain.repository_for(Review).get(review_id).helpful_votes == 3
