from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    id: str
    username: str
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class AuthSession:
    authenticated: bool = False
    user: AuthUser | None = None


@dataclass(frozen=True)
class LogoutResult:
    success: bool
    redirect_target: str | None = None
