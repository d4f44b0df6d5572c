"""Conversão de um registro de detalhe (já validado) em TransacaoCNAB."""

from datetime import datetime

from .erros import ErroCNAB, ErroDecodificacao, ErroTipoDesconhecido
from .layout import CAMPOS_DETALHE
from .logger import get_logger
from .modelos import TransacaoCNAB
from .tipos import catalogo_padrao

logger = get_logger(__name__)


def decodificar_registro(linha: str, catalogo=None) -> TransacaoCNAB:
    """
    Converte os campos posicionais da linha. Não repete as regras do
    validador: qualquer falha de conversão vira ErroDecodificacao.
    """
    if catalogo is None:
        catalogo = catalogo_padrao()

    try:
        valores = {campo.nome: campo.converter(campo.extrair(linha)) for campo in CAMPOS_DETALHE}
        catalogo.obter(valores["tipo"])
        data_hora = datetime.combine(valores.pop("data"), valores.pop("hora"))
        return TransacaoCNAB(data_hora=data_hora, **valores)
    except ErroTipoDesconhecido as exc:
        # validador e catálogo fora de sincronia
        logger.error("Tipo sem entrada no catálogo ao decodificar: %s | linha=%r", exc.codigo, linha)
        exc.linha = linha
        raise
    except ErroCNAB:
        raise
    except Exception as exc:
        raise ErroDecodificacao(f"Erro ao interpretar linha CNAB: {linha} ({exc})", linha) from exc
