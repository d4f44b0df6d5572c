import pytest

from cnab80 import BancoDados, RepositorioCNAB, catalogo_padrao


def _montar_linha(
    tipo="3",
    data="20190301",
    valor="0000014200",
    cpf="09620676017",
    cartao="4753****3153",
    hora="153453",
    dono="JOÃO MACEDO",
    loja="BAR DO JOÃO",
):
    return f"{tipo}{data}{valor}{cpf}{cartao}{hora}{dono:<14.14}{loja:<18.18}"


@pytest.fixture
def montar_linha():
    return _montar_linha


@pytest.fixture
def trailer():
    return "9".ljust(80, "0")


@pytest.fixture
def linhas_exemplo():
    return [
        _montar_linha(),
        _montar_linha(
            tipo="5",
            valor="0000013200",
            cpf="55641815063",
            cartao="3123****7687",
            hora="145607",
            dono="MARIA JOSEFINA",
            loja="LOJA DO Ó - MATRIZ",
        ),
        _montar_linha(
            tipo="3",
            valor="0000012200",
            cpf="84515254073",
            cartao="6777****1313",
            hora="172712",
            dono="MARCOS PEREIRA",
            loja="MERCADO DA AVENIDA",
        ),
    ]


@pytest.fixture
def arquivo_exemplo(linhas_exemplo, trailer):
    return ("\n".join(linhas_exemplo + [trailer]) + "\n").encode("utf-8")


@pytest.fixture
def banco(tmp_path):
    banco = BancoDados(f"sqlite:///{tmp_path / 'cnab80.db'}")
    yield banco
    banco.fechar()


@pytest.fixture
def repositorio(banco):
    repositorio = RepositorioCNAB(banco, catalogo_padrao(True))
    repositorio.criar_tabelas()
    return repositorio
