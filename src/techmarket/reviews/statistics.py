"""Review statistics and product rating-summary synchronisation.

The summary on a product is always rebuilt from the full review set read from
the store, never adjusted incrementally, so it cannot drift from the reviews
it describes.
"""

from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from techmarket.catalogue.product.product import RATING_VALUES, Product
from techmarket.reviews.review.review import Review
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


def round_one_decimal(value):
    """Round half away from zero to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize_ratings(reviews):
    """Statistics for a collection of reviews.

    Returns ``total_reviews``, ``average_rating``, ``rating_distribution``
    (all five stars present), ``rating_percentages`` and
    ``verified_purchases``.
    """
    total = len(reviews)
    distribution = {star: 0 for star in RATING_VALUES}
    for review in reviews:
        distribution[review.rating] += 1

    if total:
        average = round_one_decimal(sum(review.rating for review in reviews) / total)
        percentages = {star: round_one_decimal(100 * count / total) for star, count in distribution.items()}
    else:
        average = 0
        percentages = {star: 0 for star in RATING_VALUES}

    return {
        "total_reviews": total,
        "average_rating": average,
        "rating_distribution": distribution,
        "rating_percentages": percentages,
        "verified_purchases": sum(1 for review in reviews if review.verified_purchase),
    }


def compute_statistics(product_id):
    """Statistics over every stored review of ``product_id``."""
    reviews = current_domain.repository_for(Review).for_product(product_id)
    return summarize_ratings(reviews)


def refresh_product_rating(product_id):
    """Recompute the product's rating summary from its reviews and persist it.

    Called by the review command handlers after each create, rating change and
    delete, inside the same unit of work as the review write. A product that
    no longer exists has no summary to keep; the statistics are still returned.
    """
    statistics = compute_statistics(product_id)

    repo = current_domain.repository_for(Product)
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        logger.warning("Rating summary skipped, product missing", product_id=str(product_id))
        return statistics

    product.apply_rating_summary(
        total_reviews=statistics["total_reviews"],
        average_rating=statistics["average_rating"],
        rating_distribution=statistics["rating_distribution"],
    )
    repo.add(product)

    logger.info(
        "Product rating summary refreshed",
        product_id=str(product_id),
        total_reviews=statistics["total_reviews"],
        average_rating=statistics["average_rating"],
    )
    return statistics
