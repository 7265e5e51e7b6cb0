"""Module entrypoint for ``python -m blake``.

All argument parsing and runtime setup happen in ``blake.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
