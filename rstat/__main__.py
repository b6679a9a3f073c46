"""Module entrypoint for ``python -m rstat``.

All argument parsing and pipeline setup happen in ``rstat.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
