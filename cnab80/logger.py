"""
Logging centralizado do importador
"""

import logging

from . import config

_FORMATO = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_configurado = False


def _configurar():
    global _configurado
    pacote = logging.getLogger("cnab80")
    pacote.setLevel(config.LOG_LEVEL)

    # logger raiz já configurado pela aplicação: os registros só propagam
    if logging.getLogger().handlers:
        _configurado = True
        return

    formatter = logging.Formatter(_FORMATO, datefmt="%Y-%m-%d %H:%M:%S")

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    pacote.addHandler(ch)

    if config.LOG_ARQUIVO:
        fh = logging.FileHandler(config.LOG_ARQUIVO, encoding="utf-8")
        fh.setFormatter(formatter)
        pacote.addHandler(fh)

    _configurado = True


def get_logger(nome: str = "cnab80") -> logging.Logger:
    """Retorna um logger abaixo da hierarquia ``cnab80``, configurando-a na primeira chamada."""
    if not _configurado:
        _configurar()
    if nome != "cnab80" and not nome.startswith("cnab80."):
        nome = f"cnab80.{nome}"
    return logging.getLogger(nome)
