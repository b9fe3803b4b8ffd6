#!/usr/bin/env python3
"""
Simple Ledger Entry Point

Starts the FastAPI server with an in-memory ledger. Host, port, balance
limits and logging are read from LEDGER_* environment variables.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from simple_ledger.api import main


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nShutting down ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
