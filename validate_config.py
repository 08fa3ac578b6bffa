#!/usr/bin/env python3
"""
Validate Convo Bot config.ini.

Run standalone: python validate_config.py [--config config.ini]
Exits with 1 if any errors are found, 0 otherwise. Warnings and info are printed but do not affect exit code.
"""

import argparse
import sys

from convobot.config_validation import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    validate_config,
)


def report(results) -> int:
    """Print (severity, message) pairs to stderr and return the exit code"""
    has_error = False
    for severity, message in results:
        if severity == SEVERITY_ERROR:
            print(f"Error: {message}", file=sys.stderr)
            has_error = True
        elif severity == SEVERITY_WARNING:
            print(f"Warning: {message}", file=sys.stderr)
        else:
            print(f"Info: {message}", file=sys.stderr)
    return 1 if has_error else 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Validate Convo Bot config.ini"
    )
    parser.add_argument(
        "--config",
        default="config.ini",
        help="Path to configuration file (default: config.ini)",
    )
    args = parser.parse_args()

    return report(validate_config(args.config))


if __name__ == "__main__":
    sys.exit(main())
