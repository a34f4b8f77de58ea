"""
ParishDesk receipts - printable payment receipts for parish finance records.
"""

__version__ = "1.0.0"

