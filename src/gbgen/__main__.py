"""Allow running gbgen as ``python -m gbgen``."""

from gbgen.cli import main

if __name__ == "__main__":
    main()
