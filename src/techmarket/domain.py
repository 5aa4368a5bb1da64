"""TechMarket domain — catalogue, users, shopping carts and product reviews.

A single bounded context: the Review aggregator writes the rating summary on
Product, and the Cart store reads products to hydrate carts, so both live in
one domain and share one unit of work per command.
"""

from protean.domain import Domain

from techmarket.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

techmarket = Domain(name="techmarket")
