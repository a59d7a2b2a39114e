"""
FILE: focodiario/core/session.py
PURPOSE: Track who is signed in and drive sign-in, sign-up and logout
EXPORTS:
  - SessionController
  - STATE_UNRESOLVED / STATE_AUTHENTICATED / STATE_ANONYMOUS
DEPENDENCIES:
  - focodiario.core.identity (IdentityClient, auth events)
  - focodiario.core.accounts (username_to_email)
NOTES:
  - States: unresolved -> authenticated | anonymous at startup,
    anonymous -> authenticated on authenticate(),
    authenticated -> anonymous on logout or a SIGNED_OUT notice
  - Listeners hear about identity changes only (a token refresh for the
    same user swaps the session silently)
"""

import logging
from typing import Callable, List, Optional

from .accounts import username_to_email
from .constants import EMAIL_DOMAIN
from .exceptions import InvalidCredentialsError, InvalidInputError
from .identity import EVENT_SIGNED_OUT, IdentityClient, Subscription
from .models import Session, User

logger = logging.getLogger(__name__)

STATE_UNRESOLVED = "unresolved"
STATE_AUTHENTICATED = "authenticated"
STATE_ANONYMOUS = "anonymous"

SessionListener = Callable[[Optional[Session]], None]


class SessionController:
    """Holds the active session and keeps it in step with the identity provider."""

    def __init__(self, identity: IdentityClient, email_domain: str = EMAIL_DOMAIN):
        self._identity = identity
        self._email_domain = email_domain
        self._session: Optional[Session] = None
        self._state = STATE_UNRESOLVED
        self._subscription: Optional[Subscription] = None
        self._listeners: List[SessionListener] = []

    @property
    def state(self) -> str:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user(self) -> Optional[User]:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._state == STATE_AUTHENTICATED

    # --- Lifecycle ---

    def start(self) -> None:
        """Subscribe to session-change notifications from the identity client."""
        if self._subscription is None:
            self._subscription = self._identity.on_auth_state_change(self._on_auth_event)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """
        Call listener(session_or_none) whenever the signed-in identity changes.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # --- Operations ---

    def resolve_existing_session(self) -> Optional[Session]:
        """
        Pick up a still-valid session from a previous run.

        Never raises: any failure resolves to "no session".
        """
        try:
            session = self._identity.get_session()
        except Exception as e:
            logger.warning("Could not resolve existing session: %s", e)
            session = None

        self._apply(session)
        return session

    def authenticate(self, username: str, password: str) -> Session:
        """
        Sign in, creating the account on first use.

        Tries sign-in with the email derived from username. If the provider
        reports invalid credentials, signs up with the same email and
        password and stores username as the display name.

        Raises:
            InvalidInputError: Empty username or password
            AuthenticationError: Any other sign-in failure, or sign-up failure
        """
        if not password:
            raise InvalidInputError("Password cannot be empty")
        email = username_to_email(username, self._email_domain)

        try:
            session = self._identity.sign_in_with_password(email, password)
        except InvalidCredentialsError:
            logger.info("Sign-in refused for %s, trying sign-up", email)
            session = self._identity.sign_up(email, password, {"display_name": username})

        self._apply(session)
        return session

    def logout(self, confirm: Callable[[], bool]) -> bool:
        """
        Sign out after the user confirms.

        Args:
            confirm: Asked first; nothing happens when it returns False

        Returns:
            True if the session was ended
        """
        if not confirm():
            return False

        self._identity.sign_out()
        self._apply(None)
        return True

    # --- Internals ---

    def _on_auth_event(self, event: str, session: Optional[Session]) -> None:
        if event == EVENT_SIGNED_OUT:
            self._apply(None)
        elif session is not None:
            self._apply(session)

    def _apply(self, session: Optional[Session]) -> None:
        previous_state = self._state
        previous_user = self._session.user.id if self._session else None

        self._session = session
        self._state = STATE_AUTHENTICATED if session else STATE_ANONYMOUS
        current_user = session.user.id if session else None

        if previous_state == STATE_UNRESOLVED or previous_user != current_user:
            logger.info("Session state %s -> %s", previous_state, self._state)
            for listener in list(self._listeners):
                listener(session)
