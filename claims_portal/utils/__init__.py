"""Shared utility functions for the claims portal backend."""

from .date_parser import parse_flexible_date, whole_months_between

__all__ = ["parse_flexible_date", "whole_months_between"]
