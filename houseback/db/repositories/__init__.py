# Repository pattern: abstract data access behind a small async interface

from houseback.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
