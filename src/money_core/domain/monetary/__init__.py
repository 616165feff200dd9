"""Monetary domain package.

This package contains the currency descriptor and the two money representations,
cent precision (`Money`) and high precision (`HighPrecisionMoney`), with exact
decimal arithmetic under explicit rounding modes.
"""
