import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the domain and push its context so it can be referred to as
    `current_domain` from every test.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from techmarket.elements import init_domain

    techmarket = init_domain()
    techmarket.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from techmarket.domain import techmarket
    from techmarket.utils.db import drop_db, setup_db

    setup_db(techmarket)

    yield

    drop_db(techmarket)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Create a persisted product through its command and return its id."""
    from protean.utils.globals import current_domain

    from techmarket.catalogue.product.management import CreateProduct

    def _make(name="Laptop Pro 15", price=1299.99, **overrides):
        return current_domain.process(
            CreateProduct(name=name, price=price, **overrides),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_review():
    """Submit a review through its command and return its id."""
    from protean.utils.globals import current_domain

    from techmarket.reviews.review.submission import CreateReview

    def _make(product_id, rating=4, user_id="user-1", **overrides):
        defaults = {
            "title": "Solid machine",
            "content": "Fast, quiet and the battery lasts all day.",
        }
        defaults.update(overrides)
        return current_domain.process(
            CreateReview(product_id=product_id, user_id=user_id, rating=rating, **defaults),
            asynchronous=False,
        )

    return _make
