"""
Layout posicional do registro de detalhe CNAB 80.

Validador e decodificador percorrem a mesma lista ``CAMPOS_DETALHE``;
nenhum dos dois conhece as posições por conta própria.

Posições 0-based, fim exclusivo:

    tipo        [0:1]    1 dígito (1-9)
    data        [1:9]    AAAAMMDD
    valor       [9:19]   10 dígitos, 2 casas decimais implícitas
    cpf         [19:30]  11 dígitos
    cartao      [30:42]  12 caracteres, dígitos ou '*'
    hora        [42:48]  HHMMSS
    dono_loja   [48:62]  14 caracteres
    nome_loja   [62:80]  18 caracteres
"""

import re
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Callable, Optional

TAMANHO_REGISTRO = 80
FORMATO_CNAB80 = "CNAB 80"
TIPOS_VALIDOS = "123456789"

_RE_CARTAO = re.compile(r"^[0-9*]{12}$")


@dataclass(frozen=True)
class Campo:
    nome: str
    rotulo: str
    inicio: int
    tamanho: int
    validar: Callable[[str], Optional[str]]
    converter: Callable[[str], Any]

    @property
    def fim(self) -> int:
        return self.inicio + self.tamanho

    def extrair(self, linha: str) -> str:
        return linha[self.inicio:self.fim]


def _digitos(qtd: int):
    def validar(valor: str) -> Optional[str]:
        if len(valor) != qtd or not valor.isascii() or not valor.isdigit():
            return f"esperado {qtd} dígitos"
        return None

    return validar


def _validar_tipo(valor: str) -> Optional[str]:
    if len(valor) != 1 or valor not in TIPOS_VALIDOS:
        return "esperado dígito de 1 a 9"
    return None


def _validar_data(valor: str) -> Optional[str]:
    erro = _digitos(8)(valor)
    if erro:
        return erro
    ano, mes, dia = int(valor[0:4]), int(valor[4:6]), int(valor[6:8])
    if not 1 <= dia <= 31:
        return "dia fora do intervalo 1-31"
    if not 1 <= mes <= 12:
        return "mês fora do intervalo 1-12"
    if not 1900 <= ano <= 2100:
        return "ano fora do intervalo 1900-2100"
    try:
        date(ano, mes, dia)
    except ValueError:
        return "data inexistente"
    return None


def _validar_hora(valor: str) -> Optional[str]:
    erro = _digitos(6)(valor)
    if erro:
        return erro
    hora, minuto, segundo = int(valor[0:2]), int(valor[2:4]), int(valor[4:6])
    if hora > 23 or minuto > 59 or segundo > 59:
        return "horário fora do intervalo 00:00:00-23:59:59"
    return None


def _validar_cartao(valor: str) -> Optional[str]:
    if not _RE_CARTAO.match(valor):
        return "esperado 12 dígitos ou asteriscos"
    return None


def _validar_preenchido(valor: str) -> Optional[str]:
    if not valor.strip():
        return "não pode ser vazio"
    return None


def _converter_data(valor: str) -> date:
    return date(int(valor[0:4]), int(valor[4:6]), int(valor[6:8]))


def _converter_hora(valor: str) -> time:
    return time(int(valor[0:2]), int(valor[2:4]), int(valor[4:6]))


def _converter_valor(valor: str) -> Decimal:
    # centavos -> reais sem passar por float
    return Decimal(int(valor)).scaleb(-2)


CAMPOS_DETALHE = (
    Campo("tipo", "tipo", 0, 1, _validar_tipo, int),
    Campo("data", "data", 1, 8, _validar_data, _converter_data),
    Campo("valor", "valor", 9, 10, _digitos(10), _converter_valor),
    Campo("cpf", "CPF", 19, 11, _digitos(11), str),
    Campo("cartao", "cartão", 30, 12, _validar_cartao, str),
    Campo("hora", "hora", 42, 6, _validar_hora, _converter_hora),
    Campo("dono_loja", "dono da loja", 48, 14, _validar_preenchido, str.strip),
    Campo("nome_loja", "nome da loja", 62, 18, _validar_preenchido, str.strip),
)
