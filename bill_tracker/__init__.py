"""
Bill Tracker - Source Package

A small personal bill tracker: add, edit and delete bills, mark them
as paid, and see what is due in a given month.

DESIGN PRINCIPLES:
1. One authoritative ledger, saved after every change
2. Fail early on bad input, never on bad storage
3. Money is Decimal, rounded to the cent at every step
4. Every mutation is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bill Tracker Team"
