"""Allow ``python -m lyrlib.cli`` execution."""

from lyrlib.cli.lookup import main

main()
