#?# Start the program by calling main when run as a script :)
import sys
from pathlib import Path

if __package__ is None or __package__ == "":
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from HardenScore.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
