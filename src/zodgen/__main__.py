"""Allow ``python -m zodgen``."""

from zodgen.app import main

main()
