"""Schema management for SQL-backed providers.

The memory provider keeps no schema. For sqlite and postgresql, the DAO of
each aggregate stored in the provider is built so its table is declared on
the provider metadata, which is then created or dropped in one pass.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def setup_db(domain: Domain):
    """Create tables for every aggregate in SQL-backed providers."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            for record in domain.registry.aggregates.values():
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain):
    """Drop every table declared on SQL-backed providers."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
