"""Entry point for running the resource scripts with `python -m`."""

from stash_build_status.cli import main

if __name__ == "__main__":
    main()
