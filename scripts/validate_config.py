#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sigsim_app.config.loader import ConfigLoader
from sigsim_app.errors import ConfigurationError


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"Validating configuration in {loader.config_dir}...")

    all_valid = True

    try:
        config = loader.build_config()
        print(f"settings: ok (sure-shot threshold {config.gating.min_confidence})")
    except ConfigurationError as e:
        print("settings: invalid")
        for error in e.errors:
            print(f"  - {error.field}: {error.message} (value: {error.value})")
        all_valid = False

    try:
        knowledge = loader.load_knowledge_base()
        print(f"knowledge: ok ({len(knowledge.patterns)} patterns, "
              f"{len(knowledge.win_rates)} strategies)")
    except ConfigurationError as e:
        print("knowledge: invalid")
        for error in e.errors:
            print(f"  - {error.field}: {error.message} (value: {error.value})")
        all_valid = False

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
