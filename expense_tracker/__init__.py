"""
Expense Tracker

A personal expense tracking library: record expenses, browse and filter
them, and build category, monthly and daily spending reports. All data
lives in a local key-value store.

DESIGN PRINCIPLES:
1. Every amount shown to the user goes through one formatter
2. The formatting core is pure: the currency is passed in, never looked up
3. Lenient input, strict storage
4. Every change to the user's data is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
