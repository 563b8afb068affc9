"""Salted one-way password hashing (bcrypt via passlib)."""

from __future__ import annotations

from passlib.context import CryptContext

from safra.config import Settings


class PasswordHasher:
	def __init__(self, rounds: int = 10):
		self._context = CryptContext(
			schemes=["bcrypt"],
			deprecated="auto",
			bcrypt__rounds=rounds,
		)

	@classmethod
	def from_settings(cls, settings: Settings) -> PasswordHasher:
		return cls(rounds=settings.password_hash_rounds)

	def hash(self, plaintext: str) -> str:
		return self._context.hash(plaintext)

	def verify(self, plaintext: str, digest: str) -> bool:
		try:
			return self._context.verify(plaintext, digest)
		except ValueError:
			return False
