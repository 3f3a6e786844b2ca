"""
Account Service

User registration, login and the per-request auth guard.

Password Policy:
================
Every account shares one fixed password (DEFAULT_USER_PASSWORD, "secret"
unless configured). createUser stores its bcrypt hash, login verifies
against the stored hash, so swapping in per-user passwords later only
touches create_user().

Auth Guard:
===========
    Authorization header        current user
    -----------------------     -----------------------------------
    (absent)                    None
    "Basic ..." / other scheme  None
    "Bearer <valid token>"      the user with the token's id (or None
                                if that user no longer exists)
    "Bearer <bad token>"        AuthenticationFailed is raised
"""

import logging

from bookcatalog.config import get_settings
from bookcatalog.errors import (
    AlreadyExists,
    AuthenticationFailed,
    InvalidCredentials,
    PersistenceFailure,
)
from bookcatalog.schemas import UserRead
from bookcatalog.services.security import (
    create_access_token,
    hash_password,
    verify_password,
    verify_token_type,
)
from bookcatalog.store import CatalogStore, StoreError

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Pull the credential out of an Authorization header.

    The scheme match is case-insensitive. Returns None when the header is
    missing or uses another scheme.

    Example:
        >>> extract_bearer_token("Bearer abc.def.ghi")
        'abc.def.ghi'
        >>> extract_bearer_token("Basic dXNlcjpwYXNz") is None
        True
    """
    if not authorization:
        return None

    scheme, _, credential = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None

    return credential.strip()


class AccountService:
    """Creates users, issues tokens and resolves tokens back to users."""

    def __init__(self, store: CatalogStore):
        self.store = store
        self.settings = get_settings()

    def create_user(self, username: str, favorite_genre: str | None = None) -> UserRead:
        """
        Register a new user.

        Raises:
            AlreadyExists: username is taken
            PersistenceFailure: the store rejected the user
        """
        if self.store.find_user_by_username(username) is not None:
            raise AlreadyExists("The user already exist", invalid_args=username)

        password_hash = hash_password(self.settings.default_user_password)

        try:
            user = self.store.create_user(username, favorite_genre, password_hash)
        except StoreError as e:
            raise PersistenceFailure(
                "Creating the user failed",
                invalid_args=username,
                cause=e,
            ) from e

        logger.info(f"Created user {user.id} ({user.username})")
        return user.public()

    def login(self, username: str, password: str) -> str:
        """
        Check credentials and issue an access token for ``{username, id}``.

        Unknown usernames and wrong passwords fail identically.
        """
        user = self.store.find_user_by_username(username)

        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for '{username}'")
            raise InvalidCredentials()

        return create_access_token({"username": user.username, "id": user.id})

    def resolve_current_user(self, authorization: str | None) -> UserRead | None:
        """
        Map an Authorization header to the current user.

        Raises:
            AuthenticationFailed: a bearer token was sent but is malformed,
                expired, wrongly signed or lacks a user id
        """
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        payload = verify_token_type(token)
        if payload is None:
            raise AuthenticationFailed()

        user_id = payload.get("id")
        if not isinstance(user_id, int):
            logger.warning("Access token without a numeric user id")
            raise AuthenticationFailed()

        user = self.store.get_user(user_id)
        if user is None:
            return None

        return user.public()
