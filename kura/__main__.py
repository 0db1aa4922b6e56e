"""Module entrypoint for ``python -m kura``."""

from .cli import main


if __name__ == "__main__":
    main()
