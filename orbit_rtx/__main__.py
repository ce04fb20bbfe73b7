import sys

from orbit_rtx.cli import main

if __name__ == "__main__":
    sys.exit(main())
