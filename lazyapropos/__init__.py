"""lazyapropos: browse Clojure namespaces and symbols over nREPL.

``main`` runs the CLI; the pipeline lives in the submodules.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(argv: list[str] | None = None) -> None:
    """Run the CLI; imported on demand so ``import lazyapropos`` stays cheap."""
    from .cli import main as cli_main

    cli_main(argv)


__all__ = ["__version__", "main"]
