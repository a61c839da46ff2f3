"""Module entrypoint for ``python -m refer``.

All argument parsing and session setup happen in ``refer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
