"""
Back-office backend: product stock ledger and order aggregation for the store admin.
"""
__version__ = "1.0.0"
