from abc import ABC, abstractmethod

from salon_booking.domain.entities.auth_session import AuthSession, LogoutResult


class AuthPort(ABC):
    @abstractmethod
    def current_session(self) -> AuthSession:
        raise NotImplementedError

    @abstractmethod
    def logout(self, redirect_to: str) -> LogoutResult:
        raise NotImplementedError
