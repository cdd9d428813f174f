#!/usr/bin/env python3
"""Reset script for SmartBudget.

This script will:
1. Delete the data directory (database and logs)
2. Run migrations to create a fresh database
3. Seed the default categories
"""

import shutil
import sys

from config import load_config
from services.base import Services


def reset():
    """Reset the application state."""
    print("SmartBudget Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true in ~/.config/smartbudget.toml")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")

    response = input("\nThis will delete ALL transactions, categories and learned patterns. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    print("\nRunning migrations...")
    services = Services(config)
    applied = services.db_manager.migrate()
    print(f"✓ Applied {len(applied)} migration(s)")

    seeded = services.categories.seed_defaults()
    print(f"✓ Seeded {len(seeded)} default categories")

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
