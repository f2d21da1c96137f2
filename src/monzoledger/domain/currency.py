"""Currency handling for minor-unit amounts.

All amounts are stored and posted as signed integers in minor units (pence,
cents). Formatting goes through ``Decimal`` so the output never depends on
float rounding or the host locale.
"""

from decimal import Decimal

from monzoledger.domain.errors import CurrencyNotFoundError, currency_not_found

# ISO 4217 code -> (minor unit exponent, symbol)
CURRENCIES: dict[str, tuple[int, str]] = {
    "AUD": (2, "A$"),
    "CAD": (2, "C$"),
    "CHF": (2, "CHF "),
    "CNY": (2, "¥"),
    "CZK": (2, "Kč "),
    "DKK": (2, "kr "),
    "EUR": (2, "€"),
    "GBP": (2, "£"),
    "HKD": (2, "HK$"),
    "HUF": (2, "Ft "),
    "ISK": (0, "kr "),
    "JPY": (0, "¥"),
    "KRW": (0, "₩"),
    "MXN": (2, "Mex$"),
    "NOK": (2, "kr "),
    "NZD": (2, "NZ$"),
    "PLN": (2, "zł "),
    "SEK": (2, "kr "),
    "SGD": (2, "S$"),
    "THB": (2, "฿"),
    "TRY": (2, "₺"),
    "USD": (2, "$"),
    "ZAR": (2, "R "),
}


def find_currency(code: str) -> tuple[int, str]:
    """Look up the minor unit exponent and symbol of a currency.

    Raises:
        CurrencyNotFoundError: If the code is unknown
    """
    try:
        return CURRENCIES[code.upper()]
    except KeyError:
        raise CurrencyNotFoundError(currency_not_found(code)) from None


def minor_to_major(amount: int, exponent: int = 2) -> Decimal:
    """Convert minor units to a Decimal amount in major units.

    Example:
        minor_to_major(-500) -> Decimal("-5.00")
    """
    return Decimal(amount).scaleb(-exponent)


def format_money(amount: int, code: str) -> str:
    """Format a minor-unit amount with its currency symbol.

    Example:
        format_money(10000, "GBP") -> "£100.00"
        format_money(-1234, "USD") -> "-$12.34"

    Raises:
        CurrencyNotFoundError: If the code is unknown
    """
    exponent, symbol = find_currency(code)
    major = minor_to_major(abs(amount), exponent)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{major:,.{exponent}f}"
