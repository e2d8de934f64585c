#!/usr/bin/env python3
"""Thin wrapper: run gitgate CLI. Usage: python main.py [run|install|uninstall] (same as python -m gitgate)."""

import sys

if __name__ == "__main__":
    from gitgate.cli import main
    sys.exit(main())
