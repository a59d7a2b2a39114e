"""
FILE: focodiario/core/controller.py
PURPOSE: Root object owning the session and the goal cache for one app run
EXPORTS:
  - AppController
  - build_controller(config) -> AppController
DEPENDENCIES:
  - httpx (shared HTTP client)
  - focodiario.core.identity / repository / session / cache
NOTES:
  - Lifecycle: from_config() -> start() -> ... -> close()
  - Identity change clears the cache, then reloads it for the new user
  - Views get the controller passed in; nothing here is a module global
"""

import logging
from typing import Callable, Optional

import httpx

from .backend import create_http_client
from .cache import GoalCache
from .config import FocoConfig, load_config
from .identity import IdentityClient
from .log import configure_logging
from .models import Session
from .repository import GoalRepository
from .session import SessionController

logger = logging.getLogger(__name__)


class AppController:
    """Wires identity, repository, session and cache together."""

    def __init__(
        self,
        identity: IdentityClient,
        repository: GoalRepository,
        http: Optional[httpx.Client] = None,
    ):
        self.identity = identity
        self.session = SessionController(identity)
        self.cache = GoalCache(repository, lambda: self.session.session)
        self._http = http
        self._remove_listener: Optional[Callable[[], None]] = None

    @classmethod
    def from_config(
        cls,
        config: FocoConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "AppController":
        """
        Build a controller talking to the backend named in config.

        Raises:
            ConfigError: If the backend URL or API key is missing
        """
        http = create_http_client(config, transport=transport)
        identity = IdentityClient(http, session_path=config.session_path)
        repository = GoalRepository(http, identity)
        return cls(identity, repository, http=http)

    def start(self) -> str:
        """
        Subscribe to session changes and resolve any stored session.

        Returns:
            The resulting session state
        """
        if self._remove_listener is None:
            self._remove_listener = self.session.add_listener(self._on_identity_change)
        self.session.start()
        self.session.resolve_existing_session()
        return self.session.state

    def authenticate(self, username: str, password: str) -> Session:
        return self.session.authenticate(username, password)

    def logout(self, confirm: Callable[[], bool]) -> bool:
        return self.session.logout(confirm)

    def refresh(self) -> None:
        """Refetch the goal list from the backend."""
        self.cache.load()

    def close(self) -> None:
        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None
        self.session.close()
        if self._http is not None:
            self._http.close()
            self._http = None

    def __enter__(self) -> "AppController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _on_identity_change(self, session: Optional[Session]) -> None:
        self.cache.clear()
        if session is not None:
            logger.info("Identity changed, loading goals")
            self.cache.load()


def build_controller(config: Optional[FocoConfig] = None) -> AppController:
    """Load configuration (unless given), set up logging and build the app controller."""
    if config is None:
        config = load_config()
    configure_logging(config)
    return AppController.from_config(config)
