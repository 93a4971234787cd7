"""Entry point for 'python -m simpledata' command."""

from simpledata.cli import main

if __name__ == "__main__":
    main()
