"""Module entrypoint for ``python -m livepager``."""

from .cli import main


if __name__ == "__main__":
    main()
