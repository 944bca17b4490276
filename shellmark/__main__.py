"""Module entrypoint for ``python -m shellmark``.

All argument parsing and command dispatch happen in ``shellmark.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
