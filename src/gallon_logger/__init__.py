"""Gallon Logger - tank inventory and chemical application ledger."""

__version__ = "0.1.0"
