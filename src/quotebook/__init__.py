# src/quotebook/__init__.py
"""
Quotebook - Budget & Pricing Engine for Fence/Mesh Material Quotes

Prices line items, converts between a primary and a secondary currency at an
operator-supplied rate, assembles numbered client budgets and keeps a
searchable archive of them for later editing, sharing and export.
"""

__version__ = "1.0.0"
