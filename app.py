from datetime import datetime, timezone

from flask import Flask, jsonify, request
from werkzeug.utils import secure_filename

from importador_cnab80 import (
    FORMATO_CNAB80,
    BancoDados,
    ErroCNAB,
    LojaNaoEncontrada,
    RepositorioCNAB,
    catalogo_padrao,
    parse_cnab80,
    validar_formato,
)
from cnab80 import config
from cnab80.logger import get_logger

logger = get_logger("app")


def _ler_arquivo_enviado():
    """
    Lê o arquivo enviado no campo 'arquivo' do formulário multipart.
    Retorna (arquivo, conteudo) ou (None, None) quando nada foi enviado.
    """
    arquivo = request.files.get("arquivo")
    if not arquivo or not arquivo.filename:
        return None, None
    return arquivo, arquivo.read()


def criar_app(url_banco=None, tipo_9_trailer=None):
    """
    Monta a aplicação com o repositório já ligado ao banco informado
    (ou ao DATABASE_URL da configuração).
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False

    catalogo = catalogo_padrao(tipo_9_trailer)
    repositorio = RepositorioCNAB(BancoDados(url_banco), catalogo)
    repositorio.criar_tabelas()
    app.extensions["repositorio_cnab"] = repositorio

    @app.route("/health")
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route("/api/validar", methods=["POST"])
    def validar():
        """
        Só valida o formato do arquivo enviado, sem gravar nada.
        """
        arquivo, conteudo = _ler_arquivo_enviado()
        if arquivo is None:
            return jsonify({"erro": "Nenhum arquivo enviado."}), 400

        resultado = validar_formato(conteudo, tipo_9_trailer=catalogo.tipo_9_trailer)
        if not resultado["valido"]:
            return jsonify({"valido": False, "erro": resultado["erro"]}), 400
        return jsonify({"valido": True, "formato": resultado["formato"]})

    @app.route("/api/upload", methods=["POST"])
    def upload():
        """
        Recebe o arquivo CNAB 80, valida, interpreta e grava as transações.
        Qualquer erro rejeita o arquivo inteiro.
        """
        arquivo, conteudo = _ler_arquivo_enviado()
        if arquivo is None:
            return jsonify({"erro": "Nenhum arquivo enviado."}), 400

        try:
            lote = parse_cnab80(conteudo, tipo_9_trailer=catalogo.tipo_9_trailer)
        except ErroCNAB as exc:
            return jsonify({"erro": "Arquivo CNAB inválido", "detalhe": exc.mensagem}), 400

        nome_seguro = secure_filename(arquivo.filename) or "cnab.txt"
        arquivo_id = repositorio.persistir(
            lote,
            nome_arquivo=nome_seguro,
            nome_original=arquivo.filename,
            tamanho=len(conteudo),
        )

        return jsonify(
            {
                "mensagem": "Arquivo CNAB validado e transações gravadas com sucesso",
                "arquivo": nome_seguro,
                "tamanho": len(conteudo),
                "formato": FORMATO_CNAB80,
                "qtd_transacoes": len(lote),
                "arquivo_id": arquivo_id,
            }
        )

    @app.route("/api/transacoes")
    def transacoes():
        return jsonify({"transacoes": repositorio.listar_transacoes()})

    @app.route("/api/transacoes/loja/<loja_id>")
    def transacoes_loja(loja_id):
        try:
            itens = repositorio.transacoes_da_loja(loja_id)
        except LojaNaoEncontrada:
            return jsonify({"erro": "Loja não encontrada"}), 404
        return jsonify({"transacoes": itens})

    @app.route("/api/lojas/resumo")
    def resumo_lojas():
        return jsonify({"lojas": [r.como_dict() for r in repositorio.resumir_lojas()]})

    return app


if __name__ == "__main__":
    # debug=True é útil durante o desenvolvimento
    criar_app().run(debug=config.DEBUG)
