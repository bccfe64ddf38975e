"""Allow running as ``python -m juiceit``."""

from juiceit.cli.app import main

main()
