"""Persistence adapters."""

from amnii.repositories.users import SqlUserStore, UserStore

__all__ = ["SqlUserStore", "UserStore"]
