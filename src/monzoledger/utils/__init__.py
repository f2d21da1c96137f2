"""Utility functions for monzoledger."""

from monzoledger.utils.date_parser import parse_date, parse_datetime, to_utc

__all__ = ["parse_date", "parse_datetime", "to_utc"]
