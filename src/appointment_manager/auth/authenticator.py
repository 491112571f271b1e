"""Authenticator — checks a name/password pair against stored users."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from appointment_manager.auth.audit import AuditSink, AuthResult
from appointment_manager.database.repository import Repository
from appointment_manager.errors import SinkWriteError
from appointment_manager.models.entities import EntityKind, User

logger = logging.getLogger(__name__)


class CredentialVerifier(ABC):
    """Decides whether a password is valid for a stored user.

    Swap the implementation to change the credential scheme without
    touching callers of :class:`Authenticator`.
    """

    @abstractmethod
    def verify(self, user: User, password: str) -> bool:
        """Return ``True`` if *password* is the credential of *user*."""


class PlaintextCredentialVerifier(CredentialVerifier):
    """Exact, case-sensitive comparison against the stored password.

    No hashing or normalisation is applied.
    """

    def verify(self, user: User, password: str) -> bool:
        return user.password == password


class Authenticator:
    """Validates a claimed identity and audits every attempt.

    Flow
    ----
    1. Blank name or password fails at once, without querying the store.
    2. Otherwise all users are loaded and the one whose name matches
       exactly must verify the password.
    3. The outcome is appended to the audit sink.  A sink failure is
       logged and never changes the result, whatever the sink raises.

    A ``DataAccessError`` while loading users propagates and nothing is
    audited, since the attempt produced no outcome.
    """

    def __init__(
        self,
        repository: Repository,
        audit_sink: AuditSink,
        verifier: CredentialVerifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repository = repository
        self._audit_sink = audit_sink
        self._verifier = verifier or PlaintextCredentialVerifier()
        self._clock = clock

    async def authenticate(self, name: str, password: str) -> AuthResult:
        if not name or not password:
            logger.info("Login rejected: blank credentials")
            result = AuthResult.FAILURE
        else:
            users = await self._repository.list_all(EntityKind.USER)
            matched = any(
                user.name == name and self._verifier.verify(user, password)
                for user in users
            )
            result = AuthResult.SUCCESS if matched else AuthResult.FAILURE
            logger.info("Login %s for user %s", result.value, name)

        self._audit(name, result)
        return result

    def _audit(self, name: str, result: AuthResult) -> None:
        try:
            self._audit_sink.record(self._clock(), result, name)
        except SinkWriteError:
            logger.exception("Failed to record login attempt for %r", name)
        except Exception:
            logger.exception(
                "Audit sink %s raised unexpectedly for %r",
                type(self._audit_sink).__name__,
                name,
            )
