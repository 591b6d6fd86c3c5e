#!/usr/bin/env python3
"""
ASTEROID FIELD Launcher
========================
Run this script to start the game.
"""

from asteroid_field.main import main

if __name__ == "__main__":
    main()
