"""Entry point for `python -m ducksearch`."""

from ducksearch.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
