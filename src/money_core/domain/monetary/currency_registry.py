from money_core.domain.monetary.currency import Currency


# Major currencies
EUR = Currency("EUR", 2, "Euro", 978)
USD = Currency("USD", 2, "US Dollar", 840)
GBP = Currency("GBP", 2, "Pound Sterling", 826)
JPY = Currency("JPY", 0, "Yen", 392)
CHF = Currency("CHF", 2, "Swiss Franc", 756)
CAD = Currency("CAD", 2, "Canadian Dollar", 124)
AUD = Currency("AUD", 2, "Australian Dollar", 36)
NZD = Currency("NZD", 2, "New Zealand Dollar", 554)
CNY = Currency("CNY", 2, "Yuan Renminbi", 156)
HKD = Currency("HKD", 2, "Hong Kong Dollar", 344)
SGD = Currency("SGD", 2, "Singapore Dollar", 702)
INR = Currency("INR", 2, "Indian Rupee", 356)
BRL = Currency("BRL", 2, "Brazilian Real", 986)
MXN = Currency("MXN", 2, "Mexican Peso", 484)
ZAR = Currency("ZAR", 2, "Rand", 710)

# Europe outside the euro area
SEK = Currency("SEK", 2, "Swedish Krona", 752)
NOK = Currency("NOK", 2, "Norwegian Krone", 578)
DKK = Currency("DKK", 2, "Danish Krone", 208)
PLN = Currency("PLN", 2, "Zloty", 985)
CZK = Currency("CZK", 2, "Czech Koruna", 203)
HUF = Currency("HUF", 2, "Forint", 348)
RON = Currency("RON", 2, "Romanian Leu", 946)
TRY = Currency("TRY", 2, "Turkish Lira", 949)

# No minor unit
KRW = Currency("KRW", 0, "Won", 410)
ISK = Currency("ISK", 0, "Iceland Krona", 352)
CLP = Currency("CLP", 0, "Chilean Peso", 152)
VND = Currency("VND", 0, "Dong", 704)

# Three fraction digits
BHD = Currency("BHD", 3, "Bahraini Dinar", 48)
KWD = Currency("KWD", 3, "Kuwaiti Dinar", 414)
JOD = Currency("JOD", 3, "Jordanian Dinar", 400)
OMR = Currency("OMR", 3, "Rial Omani", 512)
TND = Currency("TND", 3, "Tunisian Dinar", 788)

# Four fraction digits (units of account)
CLF = Currency("CLF", 4, "Unidad de Fomento", 990)
UYW = Currency("UYW", 4, "Unidad Previsional", 927)

# Register all predefined currencies
for _currency in (
    EUR, USD, GBP, JPY, CHF, CAD, AUD, NZD, CNY, HKD, SGD, INR, BRL, MXN, ZAR,
    SEK, NOK, DKK, PLN, CZK, HUF, RON, TRY,
    KRW, ISK, CLP, VND,
    BHD, KWD, JOD, OMR, TND,
    CLF, UYW,
):
    Currency.register(_currency, overwrite=True)
