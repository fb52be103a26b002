"""
CashPlay Points Agent
=====================
Reads a user's point balance, requests a point grant, re-reads the balance
and reports the gain, repeating on a fixed interval until stopped.

Usage:
    python points_agent.py              # operator window
    python points_agent.py --headless   # saved settings, no window
"""

import sys

from points_core.runner import main


if __name__ == "__main__":
    sys.exit(main())
