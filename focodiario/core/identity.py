"""
FILE: focodiario/core/identity.py
PURPOSE: Client for the hosted identity provider (GoTrue auth API)
EXPORTS:
  - IdentityClient
  - Subscription
  - EVENT_SIGNED_IN / EVENT_SIGNED_OUT / EVENT_TOKEN_REFRESHED
DEPENDENCIES:
  - httpx (HTTP client)
  - focodiario.core.backend (error extraction)
  - focodiario.core.models (Session)
NOTES:
  - Persists the current session to a JSON file so one-shot CLI commands
    and later REPL runs find it, like the hosted client's own storage
  - Pushes session changes to subscribers; subscribers must unsubscribe
  - Never logs tokens or passwords
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx

from .backend import decode_json, error_message
from .exceptions import AuthenticationError, InvalidCredentialsError, RemoteError
from .models import Session

logger = logging.getLogger(__name__)

EVENT_SIGNED_IN = "SIGNED_IN"
EVENT_SIGNED_OUT = "SIGNED_OUT"
EVENT_TOKEN_REFRESHED = "TOKEN_REFRESHED"

INVALID_CREDENTIALS_MESSAGE = "Invalid login credentials"

AuthCallback = Callable[[str, Optional[Session]], None]


class Subscription:
    """Handle returned by on_auth_state_change(); call unsubscribe() when done."""

    def __init__(self, client: "IdentityClient", callback: AuthCallback):
        self._client = client
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._client._remove_subscription(self)
            self.active = False


class IdentityClient:
    """Sign-in, sign-up, refresh and sign-out against the auth endpoints."""

    def __init__(self, http: httpx.Client, session_path: Optional[Path] = None):
        self._http = http
        self._session_path = session_path
        self._session: Optional[Session] = None
        self._loaded = False
        self._subscriptions: List[Subscription] = []

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    # --- Session resolution ---

    def get_session(self) -> Optional[Session]:
        """
        Return the stored session, refreshing it first if it has expired.

        Returns None when there is no stored session or the refresh token
        was rejected.

        Raises:
            RemoteError: If the identity service cannot be reached for a refresh
        """
        if not self._loaded:
            self._session = self._load_stored()
            self._loaded = True

        if self._session is None:
            return None

        if self._session.is_expired():
            logger.info("Stored session expired, refreshing")
            return self.refresh_session()

        return self._session

    def refresh_session(self) -> Optional[Session]:
        """
        Exchange the refresh token for a new session.

        A rejected refresh token signs the session out locally and
        notifies subscribers.
        """
        session = self._session
        if session is None or not session.refresh_token:
            return None

        response = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": session.refresh_token},
        )
        if response.status_code >= 400:
            logger.warning(
                "Refresh token rejected (HTTP %s): %s",
                response.status_code,
                error_message(response),
            )
            self.invalidate()
            return None

        refreshed = Session.from_payload(decode_json(response))
        self._set_session(refreshed, EVENT_TOKEN_REFRESHED)
        return refreshed

    # --- Credentials ---

    def sign_in_with_password(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the provider does not recognise the pair
            AuthenticationError: For any other failure
        """
        try:
            response = self._request(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except RemoteError as e:
            raise AuthenticationError(str(e)) from e

        if response.status_code >= 400:
            message = error_message(response)
            if response.status_code == 400 or INVALID_CREDENTIALS_MESSAGE in message:
                raise InvalidCredentialsError(message, response.status_code)
            raise AuthenticationError(message, response.status_code)

        session = self._session_from(response)
        logger.info("Signed in as %s", session.user.email)
        self._set_session(session, EVENT_SIGNED_IN)
        return session

    def sign_up(
        self,
        email: str,
        password: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Session:
        """
        Create an account and sign it in.

        Args:
            email: Account email
            password: Account password
            data: User metadata stored with the account (e.g. display_name)

        Raises:
            AuthenticationError: If the provider refuses the sign-up or the
                account needs confirming before it can be used
        """
        try:
            response = self._request(
                "POST",
                "/auth/v1/signup",
                json={"email": email, "password": password, "data": data or {}},
            )
        except RemoteError as e:
            raise AuthenticationError(str(e)) from e

        if response.status_code >= 400:
            raise AuthenticationError(error_message(response), response.status_code)

        payload = self._json(response)
        if not payload.get("access_token"):
            raise AuthenticationError(
                "Account created but it must be confirmed before signing in"
            )

        session = self._session_from(response, payload)
        logger.info("Signed up as %s", session.user.email)
        self._set_session(session, EVENT_SIGNED_IN)
        return session

    def sign_out(self) -> None:
        """
        End the current session.

        Local state is cleared even when the remote call fails.
        """
        session = self._session
        if session is None:
            self._clear_stored()
            return

        try:
            response = self._request(
                "POST",
                "/auth/v1/logout",
                headers={"Authorization": f"Bearer {session.access_token}"},
            )
            if response.status_code >= 400 and response.status_code not in (401, 403, 404):
                logger.warning("Remote sign-out failed: %s", error_message(response))
        except RemoteError as e:
            logger.warning("Remote sign-out failed: %s", e)
        finally:
            self.invalidate()

    def invalidate(self) -> None:
        """Drop the session locally and tell subscribers it is gone."""
        had_session = self._session is not None
        self._session = None
        self._loaded = True
        self._clear_stored()
        if had_session:
            self._emit(EVENT_SIGNED_OUT, None)

    # --- Notifications ---

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_subscription(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _emit(self, event: str, session: Optional[Session]) -> None:
        logger.debug("Auth event %s", event)
        for subscription in list(self._subscriptions):
            subscription.callback(event, session)

    # --- Internals ---

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"Could not reach the identity service: {e}") from e

    def _json(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = decode_json(response)
        except RemoteError as e:
            raise AuthenticationError(str(e), e.status) from e
        if not isinstance(payload, dict):
            raise AuthenticationError("Unexpected response from the identity service")
        return payload

    def _session_from(
        self, response: httpx.Response, payload: Optional[Dict[str, Any]] = None
    ) -> Session:
        data = payload if payload is not None else self._json(response)
        try:
            return Session.from_payload(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise AuthenticationError("Unexpected response from the identity service") from e

    def _set_session(self, session: Session, event: str) -> None:
        self._session = session
        self._loaded = True
        self._store(session)
        self._emit(event, session)

    def _store(self, session: Session) -> None:
        if self._session_path is None:
            return
        self._session_path.parent.mkdir(parents=True, exist_ok=True)
        self._session_path.write_text(json.dumps(session.to_payload()), encoding="utf-8")
        try:
            os.chmod(self._session_path, 0o600)
        except OSError:
            pass  # Not supported on every platform

    def _load_stored(self) -> Optional[Session]:
        if self._session_path is None or not self._session_path.exists():
            return None
        try:
            payload = json.loads(self._session_path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ValueError("session file must hold an object")
            return Session.from_payload(payload)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self._session_path, e)
            return None

    def _clear_stored(self) -> None:
        if self._session_path is not None and self._session_path.exists():
            self._session_path.unlink()
