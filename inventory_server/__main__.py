"""
Allow running the inventory server as a Python module.

Usage:
    python -m inventory_server [--id RESOURCE_ID]

This is equivalent to running:
    python run_server.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from run_server import main

if __name__ == "__main__":
    main()
