"""Sasya Mantra storefront management CLI.

Creates and drops database schemas for both domains, and promotes an
existing account to the admin role. There is no HTTP path that changes a
role; this command is the only way to create an admin.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db --domain ordering      # Drop one domain's tables
    python src/manage.py promote-admin --email a@b.com  # Grant the admin role
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "ordering"]


def _domains():
    from identity.domain import identity
    from ordering.domain import ordering

    return {"identity": identity, "ordering": ordering}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def promote_admin(email, role="admin"):
    """Change the role of the account registered under ``email``.

    Returns True when the account exists, False otherwise. Expects an
    initialized identity domain.
    """
    from identity.domain import identity
    from identity.user.roles import ChangeRole
    from identity.user.user import User

    with identity.domain_context():
        user = identity.repository_for(User).find_by_email(email)
        if user is None:
            print(f"No account registered for {email}.")
            return False

        identity.process(ChangeRole(user_id=str(user.id), role=role), asynchronous=False)
        print(f"{email} is now {role}.")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sasya Mantra storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    promote_parser = subparsers.add_parser("promote-admin", help="Grant the admin role to an account")
    promote_parser.add_argument("--email", required=True, help="Email of the account to promote")
    promote_parser.add_argument(
        "--revoke",
        action="store_true",
        help="Demote the account back to a regular user",
    )

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "promote-admin":
        _domains()["identity"].init()
        if not promote_admin(args.email, role="user" if args.revoke else "admin"):
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
