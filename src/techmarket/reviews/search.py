"""Review search and product review listing with pagination."""

from protean.utils.globals import current_domain

from techmarket.reviews.review.review import Review
from techmarket.utils.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, paginate

SORTABLE_FIELDS = ("created_at", "rating", "helpful_votes", "title")


def search_reviews(
    product_id=None,
    query=None,
    min_rating=None,
    max_rating=None,
    verified_purchase=None,
    has_pros_cons=None,
    sort_by=None,
    sort_order=None,
    page=DEFAULT_PAGE,
    limit=DEFAULT_LIMIT,
):
    """Reviews matching every given filter, sorted and paginated.

    ``query`` matches title or content, case-insensitively. ``has_pros_cons``
    keeps only reviews listing both pros and cons when true.
    """
    reviews = current_domain.repository_for(Review).matching(
        product_id=product_id,
        min_rating=min_rating,
        max_rating=max_rating,
        verified_purchase=verified_purchase,
    )

    needle = query.strip().lower() if query else ""
    if needle:
        reviews = [
            review
            for review in reviews
            if needle in (review.title or "").lower() or needle in (review.content or "").lower()
        ]

    if has_pros_cons:
        reviews = [review for review in reviews if review.has_pros_and_cons]

    items, pagination = paginate(reviews, SORTABLE_FIELDS, sort_by, sort_order, page, limit)
    return {
        "reviews": items,
        "pagination": pagination,
        "filters": {
            "product_id": product_id,
            "query": query,
            "min_rating": min_rating,
            "max_rating": max_rating,
            "verified_purchase": verified_purchase,
            "has_pros_cons": has_pros_cons,
            "sort_by": sort_by or "created_at",
            "sort_order": sort_order or "desc",
        },
    }


def product_reviews(product_id, sort_by=None, sort_order=None, page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    """One page of a product's reviews."""
    reviews = current_domain.repository_for(Review).for_product(product_id)
    items, pagination = paginate(reviews, SORTABLE_FIELDS, sort_by, sort_order, page, limit)
    return {"reviews": items, "pagination": pagination}
