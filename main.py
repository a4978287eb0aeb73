#!/usr/bin/env python3
"""Timertronics: entry point.

Run with:
    python main.py
    python -m timertronics
"""

from timertronics.__main__ import main


if __name__ == "__main__":
    main()
