"""Validação, leitura e importação de arquivos CNAB 80."""
from .erros import (
    ErroCNAB,
    ErroEstrutural,
    ErroValidacaoCampo,
    ErroDecodificacao,
    ErroTipoDesconhecido,
    LojaNaoEncontrada,
)

from .layout import (
    CAMPOS_DETALHE,
    FORMATO_CNAB80,
    TAMANHO_REGISTRO,
    Campo,
)

from .tipos import (
    CODIGO_TRAILER,
    CatalogoTipos,
    Natureza,
    TipoTransacao,
    catalogo_padrao,
)

from .modelos import (
    LoteCNAB,
    ResumoLoja,
    TransacaoCNAB,
)

from .validacao import (
    separar_linhas,
    verificar_estrutura,
    validar_formato,
    validar_registro_detalhe,
)

from .decodificador import (
    decodificar_registro
)

from .parser import (
    EstadoParser,
    ParserCNAB80,
    parse_cnab80,
)

from .banco import (
    BancoDados
)

from .armazenamento import (
    RepositorioCNAB
)

__all__ = [
    "ErroCNAB",
    "ErroEstrutural",
    "ErroValidacaoCampo",
    "ErroDecodificacao",
    "ErroTipoDesconhecido",
    "LojaNaoEncontrada",
    "CAMPOS_DETALHE",
    "FORMATO_CNAB80",
    "TAMANHO_REGISTRO",
    "Campo",
    "CODIGO_TRAILER",
    "CatalogoTipos",
    "Natureza",
    "TipoTransacao",
    "catalogo_padrao",
    "LoteCNAB",
    "ResumoLoja",
    "TransacaoCNAB",
    "separar_linhas",
    "verificar_estrutura",
    "validar_formato",
    "validar_registro_detalhe",
    "decodificar_registro",
    "EstadoParser",
    "ParserCNAB80",
    "parse_cnab80",
    "BancoDados",
    "RepositorioCNAB",
]
