#!/usr/bin/env python3
"""
contentseo - SEO file generator for the contents repository

Run from a checkout with `python main.py <command>`; installed copies use
the `contentseo` console script instead.
"""

import sys

from contentseo.cli import main

if __name__ == "__main__":
    sys.exit(main())
