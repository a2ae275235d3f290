"""Allow ``python -m docvault``."""

from docvault.main import main

main()
