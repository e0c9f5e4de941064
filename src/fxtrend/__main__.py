# src/fxtrend/__main__.py
"""Module entry point: ``python -m fxtrend``."""

from fxtrend.app import main

main()
