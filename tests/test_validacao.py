import logging

import pytest

from cnab80.erros import ErroEstrutural
from cnab80.validacao import (
    separar_linhas,
    validar_formato,
    validar_registro_detalhe,
    verificar_estrutura,
)


def test_arquivo_valido(arquivo_exemplo):
    resultado = validar_formato(arquivo_exemplo)
    assert resultado == {"valido": True, "formato": "CNAB 80", "erro": None}


@pytest.mark.parametrize("conteudo", ["", b"", "\n\n", "   \r\n  \n"])
def test_arquivo_vazio(conteudo):
    resultado = validar_formato(conteudo)
    assert resultado["valido"] is False
    assert resultado["formato"] is None
    assert resultado["erro"] == "Arquivo vazio"


def test_tamanhos_inconsistentes(montar_linha):
    conteudo = "\n".join([montar_linha(), montar_linha()[:79], montar_linha() + "X"])
    resultado = validar_formato(conteudo)
    assert resultado["valido"] is False
    assert "inconsistentes" in resultado["erro"]
    assert "79, 80, 81" in resultado["erro"]


def test_tamanho_diferente_de_80():
    resultado = validar_formato("320190301")
    assert resultado["valido"] is False
    assert "Tamanho de registro inválido: 9" in resultado["erro"]


def test_tipo_invalido_informa_linha(montar_linha):
    conteudo = "\n".join([montar_linha(), montar_linha(tipo="0")])
    resultado = validar_formato(conteudo)
    assert resultado["valido"] is False
    assert "Linha 2" in resultado["erro"]
    assert "tipo de registro inválido '0'" in resultado["erro"]


def test_crlf_aceito(linhas_exemplo, trailer):
    conteudo = "\r\n".join(linhas_exemplo + [trailer]) + "\r\n"
    assert validar_formato(conteudo.encode("utf-8"))["valido"] is True


def test_sem_trailer_apenas_registra_nota(linhas_exemplo, caplog):
    caplog.set_level(logging.INFO, logger="cnab80")
    resultado = validar_formato("\n".join(linhas_exemplo))
    assert resultado["valido"] is True
    assert any("trailer" in r.getMessage() for r in caplog.records)


def test_sem_nota_de_trailer_no_modo_aluguel(linhas_exemplo, caplog):
    caplog.set_level(logging.INFO, logger="cnab80")
    resultado = validar_formato("\n".join(linhas_exemplo), tipo_9_trailer=False)
    assert resultado["valido"] is True
    assert not any("trailer" in r.getMessage() for r in caplog.records)


def test_registro_detalhe_invalido_rejeita_arquivo(montar_linha, trailer):
    conteudo = "\n".join([montar_linha(), montar_linha(dono=""), trailer])
    resultado = validar_formato(conteudo)
    assert resultado["valido"] is False
    assert resultado["erro"].startswith("Linha 2: dono da loja")


def test_data_inexistente_invalida_o_arquivo(montar_linha, trailer):
    conteudo = "\n".join([montar_linha(), montar_linha(data="20190231"), trailer])
    resultado = validar_formato(conteudo)
    assert resultado["valido"] is False
    assert resultado["erro"].startswith("Linha 2: data")
    assert "data inexistente" in resultado["erro"]


def test_bytes_fora_da_codificacao():
    resultado = validar_formato(b"3" + b"\xff" * 79)
    assert resultado["valido"] is False
    assert "Não foi possível ler o arquivo" in resultado["erro"]


def test_separar_linhas_descarta_brancos_e_quebras():
    assert separar_linhas("a\r\n\n  \nb\r\r\n") == ["a", "b"]


def test_verificar_estrutura_vazio():
    with pytest.raises(ErroEstrutural, match="Arquivo vazio"):
        verificar_estrutura([])


def test_registro_detalhe_valido(montar_linha):
    assert validar_registro_detalhe(montar_linha(), 1) is None
    assert validar_registro_detalhe(montar_linha(cartao="123456789012"), 1) is None
    assert validar_registro_detalhe(montar_linha(hora="000000"), 1) is None
    assert validar_registro_detalhe(montar_linha(data="21001231", hora="235959"), 1) is None
    assert validar_registro_detalhe(montar_linha(data="20200229"), 1) is None


@pytest.mark.parametrize(
    "campos, campo_esperado",
    [
        ({"tipo": "A"}, "tipo"),
        ({"data": "2019AB01"}, "data"),
        ({"data": "20191301"}, "data"),
        ({"data": "20190001"}, "data"),
        ({"data": "20190132"}, "data"),
        ({"data": "20190100"}, "data"),
        ({"data": "20190231"}, "data"),
        ({"data": "20190229"}, "data"),
        ({"data": "18991231"}, "data"),
        ({"data": "21010101"}, "data"),
        ({"valor": "00000142OO"}, "valor"),
        ({"valor": "-000014200"}, "valor"),
        ({"cpf": "0962067601X"}, "cpf"),
        ({"cartao": "4753####3153"}, "cartao"),
        ({"cartao": "4753    3153"}, "cartao"),
        ({"hora": "245959"}, "hora"),
        ({"hora": "156000"}, "hora"),
        ({"hora": "153460"}, "hora"),
        ({"hora": "15h345"}, "hora"),
        ({"dono": ""}, "dono_loja"),
        ({"loja": ""}, "nome_loja"),
    ],
)
def test_registro_detalhe_campo_invalido(montar_linha, campos, campo_esperado):
    erro = validar_registro_detalhe(montar_linha(**campos), 7)
    assert erro is not None
    assert erro.campo == campo_esperado
    assert erro.numero_linha == 7
    assert erro.mensagem.startswith("Linha 7:")


def test_registro_detalhe_guarda_valor_bruto(montar_linha):
    erro = validar_registro_detalhe(montar_linha(dono=""), 3)
    assert erro.valor == " " * 14
    assert erro.rotulo == "dono da loja"


def test_registro_detalhe_para_no_primeiro_erro(montar_linha):
    erro = validar_registro_detalhe(montar_linha(data="20191301", valor="ABCDEFGHIJ"), 1)
    assert erro.campo == "data"


def test_registro_detalhe_tamanho_errado(montar_linha):
    erro = validar_registro_detalhe(montar_linha()[:70], 4)
    assert erro.campo == "registro"
    assert erro.valor == "70"
