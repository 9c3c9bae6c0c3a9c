"""Password hashing service using bcrypt.

Provides secure password hashing and verification with configurable
strength validation.
"""

import bcrypt

from vela_identity.exceptions import WeakPasswordError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor. A fresh
    salt is generated for every call to ``hash``, so hashing the same
    password twice yields two different digests.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> digest = service.hash("secret1")
    >>> service.verify("secret1", digest)
    True
    >>> service.verify("wrong", digest)
    False
    """

    MIN_LENGTH = 6
    # bcrypt ignores everything past 72 bytes; longer input is rejected
    # outright by recent bcrypt releases
    MAX_LENGTH = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Tests use 4 to keep the suite fast.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        ``bcrypt.checkpw`` compares in constant time. Malformed digests and
        over-long input count as a mismatch.

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Raises
        ------
        WeakPasswordError
            If the password is empty, shorter than ``MIN_LENGTH`` or
            longer than ``MAX_LENGTH`` bytes
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was produced with a different work factor.

        Returns
        -------
        True if the hash should be regenerated
        """
        parts = password_hash.split("$")
        if len(parts) < 3:
            return True
        try:
            return int(parts[2]) != self._rounds
        except ValueError:
            return True
