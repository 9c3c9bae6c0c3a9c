"""Typed inputs and results of the authentication operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vela_identity.domain.user import Gender

if TYPE_CHECKING:
    from vela_identity.domain.session import Session
    from vela_identity.domain.user import User


@dataclass(frozen=True)
class SignUpData:
    """Profile and credentials submitted for a new account."""

    email: str
    password: str
    password_confirmation: str
    first_name: str
    last_name: str
    gender: Gender = Gender.OTHER


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful sign-up or sign-in."""

    user: User
    session: Session
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class SessionView:
    """A valid session as listed to its owner."""

    session: Session
    is_current: bool
