#!/usr/bin/env python3
"""focusterm — entry point.

Run with:
    python main.py
    python -m focusterm
"""

from focusterm.__main__ import main


if __name__ == "__main__":
    main()
