"""
Persistência dos lotes CNAB 80 e consultas de saldo por loja.

Valores são gravados em centavos (inteiro); o sinal da natureza só é
aplicado na agregação.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, UniqueConstraint, func, select
from sqlalchemy.orm import Mapped, joinedload, mapped_column, relationship

from .banco import Base, BancoDados
from .erros import LojaNaoEncontrada
from .formatacao import (
    centavos_para_decimal,
    decimal_para_centavos,
    formatar_data_br,
    formatar_hora,
    formatar_valor_br,
)
from .layout import FORMATO_CNAB80
from .logger import get_logger
from .modelos import LoteCNAB, ResumoLoja
from .tipos import CatalogoTipos, Natureza, catalogo_padrao

logger = get_logger(__name__)


class TipoTransacaoDB(Base):
    __tablename__ = "tipos_transacao"

    codigo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    descricao: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    natureza: Mapped[str] = mapped_column(String(20), nullable=False)
    sinal: Mapped[str] = mapped_column(String(1), nullable=False)


class Loja(Base):
    __tablename__ = "lojas"
    __table_args__ = (UniqueConstraint("dono", "nome", name="uq_lojas_dono_nome"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dono: Mapped[str] = mapped_column(String(14), nullable=False)
    nome: Mapped[str] = mapped_column(String(18), nullable=False)

    transacoes: Mapped[List["Transacao"]] = relationship(back_populates="loja")


class ArquivoImportado(Base):
    __tablename__ = "arquivos_importados"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome_arquivo: Mapped[str] = mapped_column(String(255), nullable=False)
    nome_original: Mapped[str] = mapped_column(String(255), nullable=False)
    tamanho: Mapped[int] = mapped_column(Integer, nullable=False)
    formato: Mapped[str] = mapped_column(String(20), nullable=False)
    importado_em: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    transacoes: Mapped[List["Transacao"]] = relationship(back_populates="arquivo")


class Transacao(Base):
    __tablename__ = "transacoes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tipo_codigo: Mapped[int] = mapped_column(ForeignKey("tipos_transacao.codigo"), nullable=False)
    data_hora: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    valor_centavos: Mapped[int] = mapped_column(BigInteger, nullable=False)
    cpf: Mapped[str] = mapped_column(String(11), nullable=False)
    cartao: Mapped[str] = mapped_column(String(12), nullable=False)
    loja_id: Mapped[int] = mapped_column(ForeignKey("lojas.id"), nullable=False)
    arquivo_id: Mapped[int] = mapped_column(ForeignKey("arquivos_importados.id"), nullable=False)
    # posição no arquivo (1-based, sem contar trailers)
    posicao: Mapped[int] = mapped_column(Integer, nullable=False)

    tipo: Mapped[TipoTransacaoDB] = relationship()
    loja: Mapped[Loja] = relationship(back_populates="transacoes")
    arquivo: Mapped[ArquivoImportado] = relationship(back_populates="transacoes")

    @property
    def valor(self) -> Decimal:
        return centavos_para_decimal(self.valor_centavos)


def _transacao_para_dict(t: Transacao) -> dict:
    return {
        "id": t.id,
        "tipo": t.tipo.nome,
        "codigo_tipo": t.tipo_codigo,
        "natureza": t.tipo.natureza,
        "sinal": t.tipo.sinal,
        "descricao": t.tipo.descricao,
        "data": t.data_hora.date().isoformat(),
        "data_formatada": formatar_data_br(t.data_hora),
        "hora": formatar_hora(t.data_hora),
        "valor": float(t.valor),
        "valor_formatado": formatar_valor_br(t.valor),
        "cpf": t.cpf,
        "cartao": t.cartao,
        "loja_id": t.loja_id,
        "nome_loja": t.loja.nome,
        "dono_loja": t.loja.dono,
        "arquivo_id": t.arquivo_id,
        "importado_em": t.arquivo.importado_em.date().isoformat(),
    }


class RepositorioCNAB:
    def __init__(self, banco: BancoDados, catalogo: CatalogoTipos | None = None):
        self.banco = banco
        self.catalogo = catalogo if catalogo is not None else catalogo_padrao()

    def criar_tabelas(self) -> None:
        self.banco.criar_tabelas()

    def _sincronizar_tipos(self, session) -> None:
        existentes = set(session.scalars(select(TipoTransacaoDB.codigo)))
        for tipo in self.catalogo:
            if tipo.codigo not in existentes:
                session.add(
                    TipoTransacaoDB(
                        codigo=tipo.codigo,
                        nome=tipo.nome,
                        descricao=tipo.descricao,
                        natureza=tipo.natureza.value,
                        sinal=tipo.sinal,
                    )
                )
        session.flush()

    def persistir(
        self,
        lote: LoteCNAB,
        nome_arquivo: str,
        nome_original: str | None = None,
        tamanho: int = 0,
        formato: str = FORMATO_CNAB80,
    ) -> int:
        """
        Grava o registro do arquivo, as lojas (sem duplicar) e as transações
        numa única transação de banco. Retorna o id do arquivo importado.
        """
        logger.info("Gravando lote de %s transações (%s)", len(lote), nome_arquivo)
        with self.banco.sessao() as session:
            self._sincronizar_tipos(session)

            arquivo = ArquivoImportado(
                nome_arquivo=nome_arquivo,
                nome_original=nome_original or nome_arquivo,
                tamanho=tamanho,
                formato=formato,
            )
            session.add(arquivo)
            session.flush()

            lojas = {}
            for posicao, t in enumerate(lote, start=1):
                self.catalogo.obter(t.tipo)

                chave = (t.dono_loja, t.nome_loja)
                loja = lojas.get(chave)
                if loja is None:
                    loja = session.scalars(
                        select(Loja).where(Loja.dono == t.dono_loja, Loja.nome == t.nome_loja)
                    ).first()
                    if loja is None:
                        loja = Loja(dono=t.dono_loja, nome=t.nome_loja)
                        session.add(loja)
                        session.flush()
                    lojas[chave] = loja

                session.add(
                    Transacao(
                        tipo_codigo=t.tipo,
                        data_hora=t.data_hora,
                        valor_centavos=decimal_para_centavos(t.valor),
                        cpf=t.cpf,
                        cartao=t.cartao,
                        loja_id=loja.id,
                        arquivo_id=arquivo.id,
                        posicao=posicao,
                    )
                )

            session.flush()
            arquivo_id = arquivo.id

        logger.info("Arquivo %s gravado: %s lojas, %s transações", arquivo_id, len(lojas), len(lote))
        return arquivo_id

    def resumir_lojas(self) -> List[ResumoLoja]:
        """Quantidade de transações, entradas, saídas e saldo de cada loja."""
        consulta = (
            select(
                Loja.id,
                Loja.dono,
                Loja.nome,
                TipoTransacaoDB.natureza,
                func.count(Transacao.id),
                func.coalesce(func.sum(Transacao.valor_centavos), 0),
            )
            .select_from(Loja)
            .outerjoin(Transacao, Transacao.loja_id == Loja.id)
            .outerjoin(TipoTransacaoDB, TipoTransacaoDB.codigo == Transacao.tipo_codigo)
            .group_by(Loja.id, Loja.dono, Loja.nome, TipoTransacaoDB.natureza)
            .order_by(Loja.id)
        )

        acumulado = {}
        with self.banco.sessao() as session:
            for loja_id, dono, nome, natureza, qtd, centavos in session.execute(consulta):
                item = acumulado.setdefault(
                    loja_id, {"dono": dono, "nome": nome, "qtd": 0, "entradas": 0, "saidas": 0}
                )
                item["qtd"] += qtd
                if natureza == Natureza.ENTRADA.value:
                    item["entradas"] += centavos
                elif natureza == Natureza.SAIDA.value:
                    item["saidas"] += centavos

        return [
            ResumoLoja(
                loja_id=loja_id,
                dono=item["dono"],
                nome=item["nome"],
                qtd_transacoes=item["qtd"],
                total_entradas=centavos_para_decimal(item["entradas"]),
                total_saidas=centavos_para_decimal(item["saidas"]),
            )
            for loja_id, item in acumulado.items()
        ]

    def _consultar_transacoes(self, session, *filtros) -> List[dict]:
        consulta = (
            select(Transacao)
            .options(
                joinedload(Transacao.tipo),
                joinedload(Transacao.loja),
                joinedload(Transacao.arquivo),
            )
            .order_by(Transacao.data_hora.desc(), Transacao.id)
        )
        if filtros:
            consulta = consulta.where(*filtros)
        return [_transacao_para_dict(t) for t in session.scalars(consulta)]

    def listar_transacoes(self) -> List[dict]:
        """Todas as transações, das mais recentes para as mais antigas."""
        with self.banco.sessao() as session:
            return self._consultar_transacoes(session)

    def transacoes_da_loja(self, loja_id) -> List[dict]:
        try:
            loja_id = int(loja_id)
        except (TypeError, ValueError):
            raise LojaNaoEncontrada(loja_id) from None

        with self.banco.sessao() as session:
            if session.get(Loja, loja_id) is None:
                raise LojaNaoEncontrada(loja_id)
            return self._consultar_transacoes(session, Transacao.loja_id == loja_id)
