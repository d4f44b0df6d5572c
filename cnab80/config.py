"""Configurações lidas do ambiente (e de um arquivo .env, se existir)."""

import os

from dotenv import load_dotenv

load_dotenv()


def _bool_env(nome: str, padrao: str) -> bool:
    return os.getenv(nome, padrao).strip().lower() in ("1", "true", "sim", "yes")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///cnab80.db")
DEBUG = _bool_env("DEBUG", "False")

# Código 9: registro trailer (padrão) ou transação de aluguel
TIPO_9_TRAILER = _bool_env("CNAB_TIPO_9_TRAILER", "True")
CODIFICACAO_ARQUIVO = os.getenv("CNAB_CODIFICACAO", "utf-8")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_ARQUIVO = os.getenv("LOG_ARQUIVO", "")
