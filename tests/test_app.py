import io
from datetime import datetime

import pytest

from app import criar_app


@pytest.fixture
def cliente(tmp_path):
    app = criar_app(f"sqlite:///{tmp_path / 'app.db'}", tipo_9_trailer=True)
    app.config["TESTING"] = True
    yield app.test_client()
    app.extensions["repositorio_cnab"].banco.fechar()


def _enviar(cliente, rota, conteudo, nome="cnab.txt"):
    return cliente.post(
        rota,
        data={"arquivo": (io.BytesIO(conteudo), nome)},
        content_type="multipart/form-data",
    )


def test_validar_arquivo(cliente, arquivo_exemplo):
    resposta = _enviar(cliente, "/api/validar", arquivo_exemplo)
    assert resposta.status_code == 200
    assert resposta.get_json() == {"valido": True, "formato": "CNAB 80"}


def test_validar_arquivo_invalido(cliente):
    resposta = _enviar(cliente, "/api/validar", b"Invalid CNAB content")
    assert resposta.status_code == 400
    corpo = resposta.get_json()
    assert corpo["valido"] is False
    assert "Tamanho de registro inválido" in corpo["erro"]


@pytest.mark.parametrize("rota", ["/api/validar", "/api/upload"])
def test_sem_arquivo(cliente, rota):
    resposta = cliente.post(rota, data={}, content_type="multipart/form-data")
    assert resposta.status_code == 400
    assert resposta.get_json()["erro"] == "Nenhum arquivo enviado."


def test_upload_grava_transacoes(cliente, arquivo_exemplo):
    resposta = _enviar(cliente, "/api/upload", arquivo_exemplo, nome="CNAB exemplo.txt")
    assert resposta.status_code == 200
    corpo = resposta.get_json()
    assert corpo["formato"] == "CNAB 80"
    assert corpo["qtd_transacoes"] == 3
    assert corpo["tamanho"] == len(arquivo_exemplo)
    assert corpo["arquivo"] == "CNAB_exemplo.txt"
    assert isinstance(corpo["arquivo_id"], int)

    transacoes = cliente.get("/api/transacoes").get_json()["transacoes"]
    assert len(transacoes) == 3
    assert all(t["arquivo_id"] == corpo["arquivo_id"] for t in transacoes)


def test_upload_invalido_nao_grava_nada(cliente, montar_linha):
    conteudo = "\n".join([montar_linha(), montar_linha(loja="")]).encode("utf-8")
    resposta = _enviar(cliente, "/api/upload", conteudo)
    assert resposta.status_code == 400
    corpo = resposta.get_json()
    assert corpo["erro"] == "Arquivo CNAB inválido"
    assert "Linha 2" in corpo["detalhe"]

    assert cliente.get("/api/transacoes").get_json()["transacoes"] == []
    assert cliente.get("/api/lojas/resumo").get_json()["lojas"] == []


def test_resumo_e_transacoes_por_loja(cliente, arquivo_exemplo):
    _enviar(cliente, "/api/upload", arquivo_exemplo)

    lojas = cliente.get("/api/lojas/resumo").get_json()["lojas"]
    assert len(lojas) == 3
    bar = next(l for l in lojas if l["nome"] == "BAR DO JOÃO")
    assert bar["dono"] == "JOÃO MACEDO"
    assert bar["qtd_transacoes"] == 1
    assert bar["saldo"] == -142.0

    resposta = cliente.get(f"/api/transacoes/loja/{bar['id']}")
    assert resposta.status_code == 200
    (transacao,) = resposta.get_json()["transacoes"]
    assert transacao["valor_formatado"] == "R$ 142,00"


def test_loja_inexistente(cliente):
    resposta = cliente.get("/api/transacoes/loja/invalid-id")
    assert resposta.status_code == 404
    assert resposta.get_json()["erro"] == "Loja não encontrada"


def test_health(cliente):
    resposta = cliente.get("/health")
    assert resposta.status_code == 200
    corpo = resposta.get_json()
    assert corpo["status"] == "OK"
    assert datetime.fromisoformat(corpo["timestamp"]).tzinfo is not None


def test_validar_e_upload_concordam_em_data_inexistente(cliente, montar_linha, trailer):
    conteudo = "\n".join([montar_linha(data="20190231"), trailer]).encode("utf-8")

    validacao = _enviar(cliente, "/api/validar", conteudo)
    assert validacao.status_code == 400
    assert "data inexistente" in validacao.get_json()["erro"]

    upload = _enviar(cliente, "/api/upload", conteudo)
    assert upload.status_code == 400
    assert "data inexistente" in upload.get_json()["detalhe"]
