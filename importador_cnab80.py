"""Ponto de entrada do importador CNAB 80.

Reexporta a API pública do pacote ``cnab80`` e mantém a execução
direta pela linha de comando (``python importador_cnab80.py arquivo.txt``).
"""

from cnab80 import *  # noqa: F401,F403
from cnab80 import __all__ as _CNAB80_ALL
from cnab80.cli import main

__all__ = list(_CNAB80_ALL) + ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
