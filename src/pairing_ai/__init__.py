"""Saveurs Maison IA service.

AI sommelier backend recommending wines and cheeses from the shop catalog.
"""

__version__ = "0.1.0"
