"""
Parser de lote CNAB 80.

Percorre todas as linhas do arquivo, ignora os trailers, valida e
decodifica cada registro de detalhe. O primeiro erro aborta o arquivo
inteiro; nunca é devolvido um lote parcial.
"""

from enum import Enum

from .decodificador import decodificar_registro
from .erros import ErroCNAB
from .logger import get_logger
from .modelos import LoteCNAB
from .tipos import catalogo_padrao
from .validacao import (
    decodificar_conteudo,
    separar_linhas,
    validar_registro_detalhe,
    verificar_estrutura,
)

logger = get_logger(__name__)


class EstadoParser(str, Enum):
    OCIOSO = "ocioso"
    VARRENDO = "varrendo"
    ACEITO = "aceito"
    FALHOU = "falhou"


class ParserCNAB80:
    """Um parser por arquivo; guarda o estado e a linha corrente para diagnóstico."""

    def __init__(self, catalogo=None, codificacao=None):
        self.catalogo = catalogo if catalogo is not None else catalogo_padrao()
        self.codificacao = codificacao
        self.estado = EstadoParser.OCIOSO
        self.linha_atual = 0

    def parse(self, conteudo) -> LoteCNAB:
        try:
            lote = self._parse(conteudo)
        except ErroCNAB as exc:
            self.estado = EstadoParser.FALHOU
            logger.warning("Falha no parse (linha %s): %s", self.linha_atual, exc.mensagem)
            raise
        self.estado = EstadoParser.ACEITO
        logger.info("Arquivo CNAB 80 interpretado: %s transações", len(lote))
        return lote

    def _parse(self, conteudo) -> LoteCNAB:
        linhas = separar_linhas(decodificar_conteudo(conteudo, self.codificacao))
        verificar_estrutura(linhas, self.catalogo)

        lote = LoteCNAB()
        self.estado = EstadoParser.VARRENDO
        for numero_linha, linha in enumerate(linhas, start=1):
            self.linha_atual = numero_linha
            if self.catalogo.e_trailer(int(linha[0])):
                continue

            erro = validar_registro_detalhe(linha, numero_linha)
            if erro:
                raise erro

            lote.adicionar(decodificar_registro(linha, self.catalogo))
        return lote


def parse_cnab80(conteudo, tipo_9_trailer=None, codificacao=None) -> LoteCNAB:
    """Interpreta um arquivo CNAB 80 completo (bytes ou str)."""
    return ParserCNAB80(catalogo_padrao(tipo_9_trailer), codificacao).parse(conteudo)
