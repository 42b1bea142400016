"""Allow ``python -m eventfinder.cli`` execution."""

from eventfinder.cli.search import main

main()
