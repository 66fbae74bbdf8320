"""Module entrypoint for ``python -m lazyfiler``.

All argument parsing and runtime setup happen in ``lazyfiler.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
