from .dates import add_months, month_key, to_date
from .money import ZERO, parse_amount, quantize_money, to_decimal, to_int

__all__ = ["ZERO", "add_months", "month_key", "parse_amount", "quantize_money", "to_date", "to_decimal", "to_int"]
