#!/usr/bin/env python3
"""umldoclet - entry point for running from a source checkout.

Installed distributions use the ``umldoclet`` console script instead.
"""

import sys
import warnings
from pathlib import Path

# Add src directory to Python path BEFORE imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from umldoclet.app.main import main

# Suppress Pydantic migration warnings
warnings.filterwarnings("ignore", category=UserWarning, module="pydantic._migration")


if __name__ == "__main__":
    main()
