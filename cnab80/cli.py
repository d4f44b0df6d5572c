"""Utilitario de linha de comando para o importador CNAB 80."""

import argparse
import os

from .armazenamento import RepositorioCNAB
from .banco import BancoDados
from .erros import ErroCNAB
from .formatacao import formatar_valor_br
from .parser import parse_cnab80
from .tipos import catalogo_padrao
from .validacao import validar_formato


def _argumentos(argv=None):
    parser = argparse.ArgumentParser(description="Validador/importador de arquivos CNAB 80")
    parser.add_argument("arquivo", nargs="?", help="caminho do arquivo CNAB 80 (.txt)")
    parser.add_argument(
        "--importar",
        action="store_true",
        help="grava as transacoes no banco e mostra o resumo por loja",
    )
    parser.add_argument("--banco", default=None, help="URL do banco (padrao: DATABASE_URL)")
    parser.add_argument(
        "--tipo-9-aluguel",
        action="store_true",
        help="trata o codigo 9 como aluguel em vez de registro trailer",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = _argumentos(argv)
    print("=== Validador simples de arquivos CNAB 80 ===")

    caminho = args.arquivo
    if not caminho:
        caminho = input("Informe o caminho completo do arquivo (.txt): ").strip()

    if not os.path.isfile(caminho):
        print("Erro: arquivo nao encontrado. Verifique o caminho e tente novamente.")
        return 1

    with open(caminho, "rb") as f:
        conteudo = f.read()

    tipo_9_trailer = False if args.tipo_9_aluguel else None
    resultado = validar_formato(conteudo, tipo_9_trailer=tipo_9_trailer)
    if not resultado["valido"]:
        print("Arquivo invalido:")
        print("   -", resultado["erro"])
        return 1

    print(f"OK. Layout detectado: {resultado['formato']}")

    try:
        lote = parse_cnab80(conteudo, tipo_9_trailer=tipo_9_trailer)
    except ErroCNAB as exc:
        print("Erro ao interpretar o arquivo:")
        print("   -", exc.mensagem)
        return 1

    print(f"Transacoes: {len(lote)}")
    print(f"Valor total: {formatar_valor_br(lote.valor_total)}")
    if len(lote):
        datas = [t.data_hora for t in lote]
        print("Transacao mais antiga:", min(datas).strftime("%d/%m/%Y %H:%M:%S"))
        print("Transacao mais recente:", max(datas).strftime("%d/%m/%Y %H:%M:%S"))

    if not args.importar:
        return 0

    print("\n=== Importando transacoes ===")
    banco = BancoDados(args.banco)
    try:
        repositorio = RepositorioCNAB(banco, catalogo_padrao(tipo_9_trailer))
        repositorio.criar_tabelas()
        arquivo_id = repositorio.persistir(
            lote,
            nome_arquivo=os.path.basename(caminho),
            tamanho=len(conteudo),
            formato=resultado["formato"],
        )
        print(f"OK. Arquivo importado com id {arquivo_id}.")

        print("\n=== Saldo por loja ===")
        for resumo in repositorio.resumir_lojas():
            print(
                f"   - {resumo.nome} ({resumo.dono}): {resumo.qtd_transacoes} transacoes, "
                f"saldo {formatar_valor_br(resumo.saldo)}"
            )
    finally:
        banco.fechar()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
