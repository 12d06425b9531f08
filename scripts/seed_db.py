#!/usr/bin/env python3
"""
Database seeder script to create initial roles, permissions and assignments.

This script creates:
- Two roles: 'user' and 'admin'
- Read/create/update/delete permissions on users and roles
- The default permission set for each role

Usage:
    python scripts/seed_db.py
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rolekeeper.core.errors import ConfigurationError, RoleKeeperError
from rolekeeper.main import application
from rolekeeper.seed import seed


def main():
    """Main function to run the database seeding."""
    print("🌱 Starting database seeding...")

    try:
        with application() as repos:
            assigned = seed(repos)

            print("\n🎉 Database seeding completed successfully!")
            print(f"\nNew assignments: {len(assigned)}")
            for role in repos.roles.get_all():
                rows = repos.role_permissions.get_permissions_by_role(role.id)
                names = [row.permission.permission_string for row in rows]
                print(f"  - {role.name}: {', '.join(names) or '(none)'}")

    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}")
        sys.exit(1)
    except RoleKeeperError as e:
        print(f"❌ Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
