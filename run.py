#!/usr/bin/env python3
"""
GRID ARENA Launcher
====================
Run this script to start the game.
"""

from grid_arena.main import main

if __name__ == "__main__":
    main()
