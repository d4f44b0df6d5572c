"""Hierarquia de erros do importador CNAB 80."""


class ErroCNAB(Exception):
    """Falha ao validar ou interpretar um arquivo CNAB 80."""

    def __init__(self, mensagem: str):
        super().__init__(mensagem)
        self.mensagem = mensagem


class ErroEstrutural(ErroCNAB):
    """
    Problema na estrutura do arquivo como um todo: arquivo vazio,
    tamanhos de linha inconsistentes, tamanho diferente de 80 ou
    código de tipo inválido no início de alguma linha.
    """


class ErroValidacaoCampo(ErroCNAB):
    """Um campo de um registro de detalhe não respeita a regra posicional."""

    def __init__(self, numero_linha: int, campo: str, rotulo: str, valor: str, detalhe: str):
        mensagem = f"Linha {numero_linha}: {rotulo} inválido(a) '{valor}' ({detalhe})"
        super().__init__(mensagem)
        self.numero_linha = numero_linha
        self.campo = campo
        self.rotulo = rotulo
        self.valor = valor


class ErroDecodificacao(ErroCNAB):
    """Falha ao converter um registro já validado."""

    def __init__(self, mensagem: str, linha: str = ""):
        super().__init__(mensagem)
        self.linha = linha


class ErroTipoDesconhecido(ErroDecodificacao):
    def __init__(self, codigo):
        super().__init__(f"Código de tipo de transação desconhecido: {codigo}")
        self.codigo = codigo


class LojaNaoEncontrada(LookupError):
    def __init__(self, loja_id):
        super().__init__(f"Loja não encontrada: {loja_id}")
        self.loja_id = loja_id
