"""Allow ``python -m ghkit``."""

from .cli.main import main

main()
