"""IVMA Storefront management CLI.

Usage:
    python src/manage.py setup-db          # Create all tables
    python src/manage.py drop-db           # Drop all tables
    python src/manage.py purge-sessions    # Delete expired login sessions
    python src/manage.py seed-demo         # Load a demo store with products
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating database schema...")
    prepared = setup_db(domain)
    print(f"  Schema ready for: {', '.join(prepared) or 'no SQL providers'}")
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping database schema...")
    dropped = drop_db(domain)
    print(f"  Schema dropped for: {', '.join(dropped) or 'no SQL providers'}")
    print("Done.")


def purge_sessions():
    from storefront.identity.authentication import purge_expired_sessions

    domain = _domain()
    with domain.domain_context():
        count = purge_expired_sessions()
    print(f"Removed {count} expired session(s).")


def seed_demo(slug: str):
    from storefront.catalogue.seed import seed_demo_store

    domain = _domain()
    with domain.domain_context():
        store, products = seed_demo_store(slug)
    print(f"Store '{store.store_name}' available at /stores/{store.store_slug} with {len(products)} products.")


def main():
    parser = argparse.ArgumentParser(description="IVMA Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("purge-sessions", help="Delete expired login sessions")

    seed_parser = subparsers.add_parser("seed-demo", help="Create a demo store with products")
    seed_parser.add_argument("--slug", default="demo-store", help="Slug for the demo store")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "purge-sessions":
        purge_sessions()
    elif args.command == "seed-demo":
        seed_demo(args.slug)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
