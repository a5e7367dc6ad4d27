"""
Bundle Launcher.
Entry point for frozen builds placed in the bundle's executable directory.
"""

import os
import sys

# Make the src package importable when run as a plain script
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from src.app.entry import main  # noqa: E402

if __name__ == "__main__":
    main()
