__version__ = "0.1.0"

from money_core.domain.monetary.base_money import BaseMoney
from money_core.domain.monetary.currency import Currency
from money_core.domain.monetary.high_precision_money import HighPrecisionMoney, sum_high_precision
from money_core.domain.monetary.money import Money, sum_money
from money_core.domain.monetary.rounding import RoundingMode

__all__ = ["BaseMoney", "Currency", "HighPrecisionMoney", "Money", "RoundingMode", "sum_high_precision", "sum_money"]
