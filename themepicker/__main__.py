"""Entry point for `python -m themepicker`."""

import sys


def main():
    from themepicker.app import run_cli
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
