#!/usr/bin/env python3
"""Validate fleet configuration YAML files against the schema."""
import sys
from pathlib import Path

from fleet.errors import ConfigError
from fleet.loader import load_config


def validate_config_file(filepath: Path) -> list[str]:
    """Validate a single configuration file. Returns list of errors."""
    try:
        load_config(filepath)
    except ConfigError as e:
        return [str(e)]
    return []


def main(argv=None):
    """Validate the configuration files given on the command line."""
    paths = [Path(p) for p in (argv if argv is not None else sys.argv[1:])]
    if not paths:
        print("Usage: validate_config.py CONFIG.yaml [CONFIG.yaml ...]")
        return 1

    all_valid = True
    for filepath in paths:
        errors = validate_config_file(filepath)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
