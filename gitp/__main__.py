"""Module entrypoint for ``python -m gitp``."""

from .cli import main


if __name__ == "__main__":
    main()
