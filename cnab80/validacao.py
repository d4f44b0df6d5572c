"""Validações estruturais do arquivo e validação campo a campo dos registros."""

from typing import List, Optional, Union

from . import config
from .erros import ErroCNAB, ErroEstrutural, ErroValidacaoCampo
from .layout import CAMPOS_DETALHE, FORMATO_CNAB80, TAMANHO_REGISTRO, TIPOS_VALIDOS
from .logger import get_logger
from .tipos import CODIGO_TRAILER, catalogo_padrao

logger = get_logger(__name__)


def decodificar_conteudo(conteudo: Union[bytes, str], codificacao: Optional[str] = None) -> str:
    if isinstance(conteudo, str):
        return conteudo
    codificacao = codificacao or config.CODIFICACAO_ARQUIVO
    try:
        return conteudo.decode(codificacao)
    except UnicodeDecodeError as exc:
        raise ErroEstrutural(
            f"Não foi possível ler o arquivo como {codificacao}: {exc.reason} "
            f"(byte {exc.start})"
        ) from exc


def separar_linhas(texto: str) -> List[str]:
    """
    Quebra o conteúdo em registros: separa por '\\n', remove '\\r'/'\\n'
    do final de cada linha e descarta linhas em branco.
    """
    linhas = (linha.rstrip("\r\n") for linha in texto.split("\n"))
    return [linha for linha in linhas if linha.strip() != ""]


def detectar_tamanhos(linhas: List[str]) -> set:
    return set(len(linha) for linha in linhas)


def verificar_estrutura(linhas: List[str], catalogo=None) -> None:
    """
    Checagens de arquivo inteiro, na ordem: vazio, tamanhos distintos,
    tamanho diferente de 80, tipo inválido no início de alguma linha.
    Levanta ErroEstrutural no primeiro problema encontrado.

    A ausência de trailer só é anotada no log quando o catálogo reserva
    o tipo 9 para o trailer.
    """
    if catalogo is None:
        catalogo = catalogo_padrao()

    if not linhas:
        raise ErroEstrutural("Arquivo vazio")

    tamanhos = detectar_tamanhos(linhas)
    if len(tamanhos) != 1:
        encontrados = ", ".join(str(t) for t in sorted(tamanhos))
        raise ErroEstrutural(
            "Tamanhos de registro inconsistentes, não é um arquivo CNAB válido. "
            f"Tamanhos encontrados: {encontrados}"
        )

    tamanho = tamanhos.pop()
    if tamanho != TAMANHO_REGISTRO:
        raise ErroEstrutural(
            f"Tamanho de registro inválido: {tamanho}. "
            f"Esperado {TAMANHO_REGISTRO} caracteres para o formato {FORMATO_CNAB80}."
        )

    for numero_linha, linha in enumerate(linhas, start=1):
        if linha[0] not in TIPOS_VALIDOS:
            raise ErroEstrutural(
                f"Linha {numero_linha}: tipo de registro inválido '{linha[0]}' "
                "(esperado dígito de 1 a 9)"
            )

    if catalogo.tipo_9_trailer and not catalogo.e_trailer(int(linhas[-1][0])):
        logger.info(
            "Nota: arquivo não termina com registro trailer (tipo %s); seguindo com a validação",
            CODIGO_TRAILER,
        )


def validar_registro_detalhe(linha: str, numero_linha: int) -> Optional[ErroValidacaoCampo]:
    """
    Valida um registro de detalhe contra o layout posicional.
    Retorna o erro do primeiro campo inválido ou None.
    """
    if len(linha) != TAMANHO_REGISTRO:
        return ErroValidacaoCampo(
            numero_linha,
            "registro",
            "tamanho do registro",
            str(len(linha)),
            f"esperado {TAMANHO_REGISTRO}",
        )

    for campo in CAMPOS_DETALHE:
        valor = campo.extrair(linha)
        detalhe = campo.validar(valor)
        if detalhe:
            return ErroValidacaoCampo(numero_linha, campo.nome, campo.rotulo, valor, detalhe)
    return None


def validar_formato(conteudo, tipo_9_trailer=None, codificacao=None) -> dict:
    """
    Verifica se o conteúdo é um CNAB 80 aceitável.

    Além das checagens estruturais, valida cada registro de detalhe, de
    modo que um arquivo aprovado aqui também é aceito pelo parser.
    Retorna {"valido": bool, "formato": str | None, "erro": str | None}.
    """
    catalogo = catalogo_padrao(tipo_9_trailer)
    try:
        linhas = separar_linhas(decodificar_conteudo(conteudo, codificacao))
        verificar_estrutura(linhas, catalogo)
        for numero_linha, linha in enumerate(linhas, start=1):
            if catalogo.e_trailer(int(linha[0])):
                continue
            erro = validar_registro_detalhe(linha, numero_linha)
            if erro:
                raise erro
    except ErroCNAB as exc:
        logger.warning("Arquivo rejeitado: %s", exc.mensagem)
        return {"valido": False, "formato": None, "erro": exc.mensagem}

    return {"valido": True, "formato": FORMATO_CNAB80, "erro": None}
