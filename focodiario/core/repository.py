"""
FILE: focodiario/core/repository.py
PURPOSE: Remote goals table operations (PostgREST over httpx)
EXPORTS:
  - GoalRepository
      .list_goals(user_id) -> List[Goal]
      .create_goal(title, category, user_id) -> Goal
      .update_goal_completed(goal_id, completed) -> None
      .delete_goal(goal_id) -> None
DEPENDENCIES:
  - httpx (HTTP client)
  - focodiario.core.identity (access token, refresh on 401)
  - focodiario.core.models (Goal)
NOTES:
  - Returns domain objects (Goal), never raw rows
  - Rows are also scoped server-side by row-level security on user_id
  - A 401 triggers one token refresh and a retry; a failed refresh signs
    the session out through the identity client
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .backend import decode_json, error_message
from .constants import GOALS_TABLE, OWNER_COLUMN
from .exceptions import NotAuthenticatedError, RemoteError
from .identity import IdentityClient
from .models import Goal

logger = logging.getLogger(__name__)


class GoalRepository:
    """CRUD over the remote goals table for the signed-in user."""

    def __init__(self, http: httpx.Client, identity: IdentityClient, table: str = GOALS_TABLE):
        self._http = http
        self._identity = identity
        self._path = f"/rest/v1/{table}"

    def list_goals(self, user_id: str) -> List[Goal]:
        """
        Fetch every goal owned by user_id, newest first.

        Raises:
            RemoteError: If the request fails
        """
        response = self._request(
            "GET",
            params={
                "select": "*",
                OWNER_COLUMN: f"eq.{user_id}",
                "order": "created_at.desc",
            },
        )
        rows = decode_json(response)
        if not isinstance(rows, list):
            raise RemoteError("Unexpected response listing goals", response.status_code)
        try:
            return [Goal.from_row(row) for row in rows]
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Malformed goal row: {e}", response.status_code) from e

    def create_goal(self, title: str, category: str, user_id: str) -> Goal:
        """
        Insert a goal and return it with its server-assigned id and timestamp.

        Raises:
            RemoteError: If the insert fails or returns no row
        """
        response = self._request(
            "POST",
            json=[
                {
                    "title": title,
                    "category": category,
                    "completed": False,
                    OWNER_COLUMN: user_id,
                }
            ],
            headers={"Prefer": "return=representation"},
        )
        rows = decode_json(response)
        if not isinstance(rows, list) or not rows:
            raise RemoteError("Backend did not return the created goal", response.status_code)
        return Goal.from_row(rows[0])

    def update_goal_completed(self, goal_id: str, completed: bool) -> None:
        self._request(
            "PATCH",
            params={"id": f"eq.{goal_id}"},
            json={"completed": completed},
        )

    def delete_goal(self, goal_id: str) -> None:
        self._request("DELETE", params={"id": f"eq.{goal_id}"})

    # --- Internals ---

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        response = self._send(method, params, json, headers)

        if response.status_code == 401:
            logger.info("Access token rejected, refreshing session")
            if self._identity.refresh_session() is None:
                raise NotAuthenticatedError("Session expired, please log in again")
            response = self._send(method, params, json, headers)

        if response.status_code >= 400:
            message = error_message(response)
            logger.warning("%s %s failed (HTTP %s): %s", method, self._path, response.status_code, message)
            raise RemoteError(message, response.status_code)

        return response

    def _send(
        self,
        method: str,
        params: Optional[Dict[str, str]],
        json: Any,
        headers: Optional[Dict[str, str]],
    ) -> httpx.Response:
        session = self._identity.current_session
        if session is None:
            raise NotAuthenticatedError()

        request_headers = {"Authorization": f"Bearer {session.access_token}"}
        if headers:
            request_headers.update(headers)

        try:
            return self._http.request(
                method,
                self._path,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, self._path, e)
            raise RemoteError(f"Could not reach the backend: {e}") from e
