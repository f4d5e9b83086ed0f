"""
Auth Service Domain Entities

Each entity in its own file.
"""

from .account import Account

__all__ = [
    "Account",
]
