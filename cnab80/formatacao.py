"""Formatação para exibição no padrão brasileiro."""

from decimal import Decimal


def formatar_data_br(dt):
    if not dt:
        return None
    return dt.strftime("%d/%m/%Y")


def formatar_hora(dt):
    if not dt:
        return None
    return dt.strftime("%H:%M:%S")


def formatar_valor_br(valor) -> str:
    """Decimal('1234.5') -> 'R$ 1.234,50'"""
    valor = Decimal(valor).quantize(Decimal("0.01"))
    sinal = "-" if valor < 0 else ""
    texto = f"{abs(valor):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sinal}R$ {texto}"


def centavos_para_decimal(centavos: int) -> Decimal:
    return Decimal(int(centavos)).scaleb(-2)


def decimal_para_centavos(valor: Decimal) -> int:
    return int((Decimal(valor) * 100).to_integral_value())
