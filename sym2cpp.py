#!/usr/bin/env python3
"""
sym2cpp - generate address-bound C++ bindings from a lexed symbol dump.

Thin wrapper around app.cli so the tool runs from a source checkout.
"""

from app.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
