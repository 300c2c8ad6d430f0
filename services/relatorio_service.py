"""Relatórios de vendas, valores a receber e alertas de estoque."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple

from core.estoque import alertas_estoque
from core.totais import totais_comanda
from models import Comanda, ItemCardapio, StatusComanda, User, UserRole
from repositories.base import Repositorio


class RelatorioService:
    def __init__(self, repo: Repositorio) -> None:
        self.repo = repo

    @staticmethod
    def periodo_padrao(usuario: Optional[User] = None, hoje: Optional[date] = None) -> Tuple[date, date]:
        hoje = hoje or date.today()
        if usuario is not None and usuario.role == UserRole.ADMIN:
            return hoje - timedelta(days=30), hoje
        return hoje, hoje

    def _pagas_no_periodo(self, inicio: date, fim: date) -> List[Comanda]:
        de = datetime.combine(inicio, time.min)
        ate = datetime.combine(fim, time.max)
        return [
            c
            for c in self.repo.listar_comandas()
            if c.status == StatusComanda.PAGA and c.pago_em and de <= c.pago_em.replace(tzinfo=None) <= ate
        ]

    def vendas_periodo(self, inicio: date, fim: date) -> Dict[str, float]:
        comandas = self._pagas_no_periodo(inicio, fim)
        return {
            "quantidade": len(comandas),
            "total": sum(totais_comanda(c).subtotal for c in comandas),
        }

    def vendas_por_dia(self, inicio: date, fim: date) -> Dict[str, float]:
        """Total vendido por dia (``dd/MM``), incluindo os dias sem venda."""
        dias: Dict[str, float] = {}
        dia = inicio
        while dia <= fim:
            dias[f"{dia:%d/%m}"] = 0.0
            dia += timedelta(days=1)
        for comanda in self._pagas_no_periodo(inicio, fim):
            chave = f"{comanda.pago_em:%d/%m}"
            dias[chave] = dias.get(chave, 0.0) + totais_comanda(comanda).subtotal
        return dias

    def totais_por_forma(self, inicio: date, fim: date) -> Dict[str, float]:
        de = datetime.combine(inicio, time.min)
        ate = datetime.combine(fim, time.max)
        totais: Dict[str, float] = {}
        for comanda in self.repo.listar_comandas():
            for pagamento in comanda.pagamentos:
                if de <= pagamento.pago_em.replace(tzinfo=None) <= ate:
                    totais[pagamento.forma] = totais.get(pagamento.forma, 0.0) + pagamento.valor
        return totais

    def valor_a_receber(self) -> float:
        # Consumo das comandas ainda não pagas, sem descontar pagamentos parciais.
        return sum(
            totais_comanda(c).subtotal for c in self.repo.listar_comandas() if c.status != StatusComanda.PAGA
        )

    def alertas_estoque(self) -> Dict[str, List[ItemCardapio]]:
        return alertas_estoque(self.repo.listar_itens_cardapio())


__all__ = ["RelatorioService"]
