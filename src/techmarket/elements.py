"""Element registration for the techmarket domain.

Aggregates, commands, events and handlers live two folders below
``techmarket/`` (``catalogue/product``, ``reviews/review`` ...), deeper than
the domain traversal reaches. They register themselves when imported, so
every module is listed here and loaded before ``techmarket.init()``.
"""

import importlib

from techmarket.domain import techmarket

ELEMENT_MODULES = (
    "techmarket.catalogue.category.category",
    "techmarket.catalogue.category.management",
    "techmarket.catalogue.product.events",
    "techmarket.catalogue.product.product",
    "techmarket.catalogue.product.management",
    "techmarket.identity.user.user",
    "techmarket.identity.user.registration",
    "techmarket.reviews.review.events",
    "techmarket.reviews.review.review",
    "techmarket.reviews.review.submission",
    "techmarket.reviews.review.editing",
    "techmarket.reviews.review.removal",
    "techmarket.reviews.review.voting",
    "techmarket.cart.events",
    "techmarket.cart.items",
    "techmarket.cart.cart",
    "techmarket.cart.management",
)

_initialized = False


def load_elements() -> None:
    for module in ELEMENT_MODULES:
        importlib.import_module(module)


def init_domain():
    """Register every element and initialize the domain once per process."""
    global _initialized

    load_elements()
    if not _initialized:
        techmarket.init()
        _initialized = True
    return techmarket
