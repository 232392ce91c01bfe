# ticketdesk/auth/passwords.py
import bcrypt

from ticketdesk.core.errors import DataCorruption

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("ascii")

    def verify(self, plaintext: str, hashed: str) -> bool:
        password = plaintext.encode("utf-8")
        if len(password) > MAX_PASSWORD_BYTES:
            # Never accepted at registration, so it cannot match
            return False
        try:
            return bcrypt.checkpw(password, hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as exc:
            # Only a broken stored hash gets here
            raise DataCorruption() from exc

    @property
    def dummy_hash(self) -> str:
        """Hash at the configured cost for checking passwords of unknown accounts."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("ticketdesk-no-such-user")
        return self._dummy_hash
