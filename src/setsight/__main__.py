"""
SetSight CLI Entry Point

Allows running the package as a module: python -m setsight
"""

from setsight.cli import main

if __name__ == "__main__":
    main()
