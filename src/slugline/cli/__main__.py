"""Main entry point for the slugline CLI when run as a module."""

from slugline.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
