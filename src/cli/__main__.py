# =============================================================================
# src/cli/__main__.py — Package Entry Point
# =============================================================================
#
# Enables ``python -m src.cli``; all sub-commands live in listing.py.
# =============================================================================

from src.cli.listing import main

main()
