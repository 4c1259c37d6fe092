"""Utility modules for db-lab."""

from db_lab.utils.serialization import dumps

__all__ = ["dumps"]
