"""Allow ``python -m lazyapropos`` as an alias for the ``lazyapropos`` script."""

from .cli import main

if __name__ == "__main__":
    main()
