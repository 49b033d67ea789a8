"""bcrypt Password Hasher Implementation"""

import bcrypt

from src.app.services.password_hasher import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt implementation of PasswordHasher

    bcrypt only considers the first 72 bytes of a password; longer
    passwords are rejected at the API boundary.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False
