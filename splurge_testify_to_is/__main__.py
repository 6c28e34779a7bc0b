"""Main entry point for running splurge-testify-to-is as a module.

This allows users to run the CLI with:
    python -m splurge_testify_to_is [command] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
