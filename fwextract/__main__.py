#!/usr/bin/env python3
"""
fwextract - Embedded GPU firmware extractor

Main entry point for command-line usage.
"""

from fwextract.cli import main

if __name__ == '__main__':
    main()
