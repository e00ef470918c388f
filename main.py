#!/usr/bin/env python3
"""detimer entry point.

Run with:
    python main.py -m 25
    python -m detimer -m 25
"""

from detimer.__main__ import run


if __name__ == "__main__":
    run()
