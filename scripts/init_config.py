#!/usr/bin/env python3
"""
Initialize the user configuration directory.

Run this script to copy the bundled category rules into config/
so they can be edited.
"""
import shutil

from calendar_tracker.config.settings import (
    PACKAGE_CONFIG_DIR,
    USER_CONFIG_DIR,
    RULES_CONFIG_NAME,
    CREDENTIALS_FILE,
)
from calendar_tracker.categorization import CategorizationEngine

def main():
    """Create config/categories.json from the bundled sample."""

    target = USER_CONFIG_DIR / RULES_CONFIG_NAME
    USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Initializing configuration in: {USER_CONFIG_DIR}")

    if target.exists():
        print(f"✓ {target.name} already exists, leaving it untouched")
    else:
        shutil.copy(PACKAGE_CONFIG_DIR / RULES_CONFIG_NAME, target)
        print(f"✓ Wrote sample rules to {target}")

    engine = CategorizationEngine(config_path=target)
    print("  Rules, in the order they are tried:")
    for line in engine.get_rule_chain_info().splitlines():
        print(f"    {line}")

    if not CREDENTIALS_FILE.exists():
        print(f"✗ No Google OAuth client found at {CREDENTIALS_FILE}")
        print("  Download a desktop client JSON from the Google Cloud console and save it there.")

if __name__ == "__main__":
    main()
