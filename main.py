#!/usr/bin/env python3
"""Halfwit - find the files that make a command fail."""

from halfwit.cli import main

if __name__ == "__main__":
    main()
