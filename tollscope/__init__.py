"""
tollscope package
=================

Disaster death-toll scatterplot explorer.

- The CLI entry point is in `tollscope/cli.py`.
- Selection state and filtering live in `tollscope/engine.py`.
- Dataset loading and row cleaning are in `tollscope/loader.py`.
- Chart rendering (HTML + PNG) is in `tollscope/chart.py`.
"""

__version__ = '0.1.0'
