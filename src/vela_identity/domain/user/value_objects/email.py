"""Email value object.

Provides validated, normalized email addresses for user identification.
Validation uses the same ``email_validator`` rules as pydantic's ``EmailStr``
at the API boundary, so a request that passes schema validation is never
rejected again here.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from vela_identity.domain.user.exceptions import InvalidEmailError


@dataclass(frozen=True)
class Email:
    """Value object representing a validated, lower-cased email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        try:
            validated = validate_email(self.value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg) from e

        # frozen dataclass: bypass __setattr__ to store the normalized form
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
