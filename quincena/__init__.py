"""Premios de la Quincena: awards for your bank statement's spending habits."""

__version__ = "1.0.0"
