# =============================================================================
# src/cli/__init__.py — CLI Module Overview
# =============================================================================
#
# Command-line access to the esploraCitta directory without the HTTP
# server.  Run the package itself:
#
#     python -m src.cli cities
#     python -m src.cli places Roma --category Ristoranti --sort rating
#     python -m src.cli places 4 --rating 4.5plus --json
#     python -m src.cli serve --port 8080
#
# The listing commands build a seeded in-memory store in-process, so they
# always show the startup data set.
#
# Architecture Notes:
#   - argparse, like the rest of the tooling.
#   - uvicorn is imported inside the ``serve`` handler so listing commands
#     start without loading the server stack.
# =============================================================================

"""CLI tools for the esploraCitta directory.

- ``python -m src.cli cities`` — list cities.
- ``python -m src.cli places <city>`` — list a city's places with the
  listing filters and sort modes.
- ``python -m src.cli serve`` — run the API with uvicorn.
"""
