"""TechMarket database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables

PROTEAN_ENV selects the database configuration, e.g. ``production`` for
PostgreSQL at ``DATABASE_URL``.
"""

import argparse
import sys


def setup_database():
    """Create the database schema for every aggregate."""
    from techmarket.elements import init_domain
    from techmarket.utils.db import setup_db

    print("Initializing techmarket domain...")
    techmarket = init_domain()
    print("Creating database schema...")
    setup_db(techmarket)
    print("Done.")


def drop_database():
    """Drop the database schema for every aggregate."""
    from techmarket.elements import init_domain
    from techmarket.utils.db import drop_db

    print("Initializing techmarket domain...")
    techmarket = init_domain()
    print("Dropping database schema...")
    drop_db(techmarket)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="TechMarket database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
