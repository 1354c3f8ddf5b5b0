"""Utility functions for the asset ledger CLI."""

from assetledger.utils.date_parser import parse_date
from assetledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
