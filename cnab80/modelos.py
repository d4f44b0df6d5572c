"""Estruturas de dados produzidas pelo parser e pelo resumo por loja."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class TransacaoCNAB:
    tipo: int
    data_hora: datetime
    valor: Decimal
    cpf: str
    cartao: str
    dono_loja: str
    nome_loja: str


@dataclass
class LoteCNAB:
    """Transações de um arquivo, na mesma ordem das linhas (trailers de fora)."""

    transacoes: List[TransacaoCNAB] = field(default_factory=list)

    def adicionar(self, transacao: TransacaoCNAB) -> None:
        self.transacoes.append(transacao)

    def __len__(self) -> int:
        return len(self.transacoes)

    def __iter__(self):
        return iter(self.transacoes)

    def __getitem__(self, indice):
        return self.transacoes[indice]

    @property
    def valor_total(self) -> Decimal:
        return sum((t.valor for t in self.transacoes), Decimal("0.00"))


@dataclass(frozen=True)
class ResumoLoja:
    loja_id: int
    dono: str
    nome: str
    qtd_transacoes: int
    total_entradas: Decimal
    total_saidas: Decimal

    @property
    def saldo(self) -> Decimal:
        return self.total_entradas - self.total_saidas

    def como_dict(self) -> dict:
        return {
            "id": self.loja_id,
            "dono": self.dono,
            "nome": self.nome,
            "qtd_transacoes": self.qtd_transacoes,
            "total_entradas": float(self.total_entradas),
            "total_saidas": float(self.total_saidas),
            "saldo": float(self.saldo),
        }
