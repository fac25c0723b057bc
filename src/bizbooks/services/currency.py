from decimal import Decimal, InvalidOperation

from bizbooks.domain.value_objects import Currency

CURRENCY_SYMBOLS: dict[str, str] = {
    Currency.KES.value: "KSh ",
    Currency.UGX.value: "USh ",
    Currency.TZS.value: "TSh ",
    Currency.USD.value: "$",
    Currency.EUR.value: "€",
    Currency.GBP.value: "£",
}


def _get_currency_str(currency: Currency | str) -> str:
    if isinstance(currency, Currency):
        return currency.value
    return currency.upper()


class CurrencyFormatter:
    """Formats amounts for table cells in a company's currency.

    Formatting happens at render time; rows keep the raw Decimal.
    """

    def __init__(self, currency: Currency | str = Currency.KES) -> None:
        self._currency = _get_currency_str(currency)

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self._currency, f"{self._currency} ")

    def format(self, amount: Decimal | int | float | str) -> str:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            return str(amount)
        if not value.is_finite():
            return str(amount)

        formatted = f"{abs(value):,.2f}"
        if value < 0:
            return f"-{self.symbol}{formatted}"
        return f"{self.symbol}{formatted}"
