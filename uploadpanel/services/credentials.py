from __future__ import annotations
import hmac
import logging

from uploadpanel.errors import InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)


class CredentialChecker:
    """Un solo amministratore configurato; confronto in chiaro (nessun hash)."""

    def __init__(self, admin_username: str, admin_password: str):
        self._username = admin_username
        self._password = admin_password

    def authenticate(self, username: str, password: str) -> str:
        if username == "" or password == "":
            raise ValidationError("username and password are required")
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        if not (user_ok and pass_ok):
            logger.info("login failed for %r", username)
            raise InvalidCredentials()
        logger.info("login ok for %r", username)
        return username
