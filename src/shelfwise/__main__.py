"""Main entry point for the shelfwise package."""

from shelfwise.cli import main

if __name__ == "__main__":
    main()
