"""Command-line tools for eventfinder.

- ``python -m eventfinder.cli`` (or ``python -m eventfinder.cli.search``)
  runs one search against the configured dataset without the web server.
"""
