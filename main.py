#!/usr/bin/env python3
"""HIITTime — entry point.

Run with:
    python main.py --work 40 --rest 20 --reps 8
    python -m hiittime
"""

import sys

from hiittime.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
