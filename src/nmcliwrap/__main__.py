"""Allow ``python -m nmcliwrap``."""

from nmcliwrap.cli import main

main()
