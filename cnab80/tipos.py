"""Catálogo de tipos de transação do CNAB 80."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from . import config
from .erros import ErroTipoDesconhecido

CODIGO_TRAILER = 9


class Natureza(str, Enum):
    ENTRADA = "Entrada"
    SAIDA = "Saída"


@dataclass(frozen=True)
class TipoTransacao:
    codigo: int
    nome: str
    descricao: str
    natureza: Natureza

    @property
    def sinal(self) -> str:
        return "+" if self.natureza is Natureza.ENTRADA else "-"


_TIPOS = (
    TipoTransacao(1, "Débito", "Transação de débito", Natureza.ENTRADA),
    TipoTransacao(2, "Boleto", "Pagamento de boleto", Natureza.SAIDA),
    TipoTransacao(3, "Financiamento", "Pagamento de financiamento", Natureza.SAIDA),
    TipoTransacao(4, "Crédito", "Transação de crédito", Natureza.ENTRADA),
    TipoTransacao(5, "Recebimento Empréstimo", "Recebimento de empréstimo", Natureza.ENTRADA),
    TipoTransacao(6, "Vendas", "Venda", Natureza.ENTRADA),
    TipoTransacao(7, "Recebimento TED", "Recebimento de TED", Natureza.ENTRADA),
    TipoTransacao(8, "Recebimento DOC", "Recebimento de DOC", Natureza.ENTRADA),
    TipoTransacao(9, "Aluguel", "Pagamento de aluguel", Natureza.SAIDA),
)


class CatalogoTipos:
    """
    Tabela imutável código -> TipoTransacao.

    Com ``tipo_9_trailer=True`` o código 9 fica fora do catálogo, pois é
    reservado ao registro trailer e nunca chega a ser decodificado. Com
    ``False`` o código 9 é tratado como despesa de aluguel.
    """

    def __init__(self, tipo_9_trailer: bool = True):
        self.tipo_9_trailer = tipo_9_trailer
        self._tipos = MappingProxyType(
            {
                t.codigo: t
                for t in _TIPOS
                if not (tipo_9_trailer and t.codigo == CODIGO_TRAILER)
            }
        )

    def __contains__(self, codigo) -> bool:
        return codigo in self._tipos

    def __iter__(self):
        return iter(self._tipos.values())

    def __len__(self) -> int:
        return len(self._tipos)

    def obter(self, codigo: int) -> TipoTransacao:
        try:
            return self._tipos[codigo]
        except KeyError:
            raise ErroTipoDesconhecido(codigo) from None

    def nome_de(self, codigo: int) -> str:
        return self.obter(codigo).nome

    def natureza_de(self, codigo: int) -> Natureza:
        return self.obter(codigo).natureza

    def sinal_de(self, codigo: int) -> str:
        return self.obter(codigo).sinal

    def e_trailer(self, codigo: int) -> bool:
        return self.tipo_9_trailer and codigo == CODIGO_TRAILER


_CATALOGOS = {
    True: CatalogoTipos(tipo_9_trailer=True),
    False: CatalogoTipos(tipo_9_trailer=False),
}


def catalogo_padrao(tipo_9_trailer=None) -> CatalogoTipos:
    """
    Retorna o catálogo compartilhado para a configuração pedida.
    Sem argumento, usa ``config.TIPO_9_TRAILER``.
    """
    if tipo_9_trailer is None:
        tipo_9_trailer = config.TIPO_9_TRAILER
    return _CATALOGOS[bool(tipo_9_trailer)]
