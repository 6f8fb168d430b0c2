"""Supabase connection handle with an explicit open/close lifecycle."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx
from supabase.lib.client_options import SyncClientOptions

from app.config import Settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


class SupabaseConnection:
    """Own the service-role Supabase client and its HTTP connection pool.

    Built once at process startup and closed at shutdown; request handlers
    receive the client through dependency injection.
    """

    def __init__(
        self,
        url: str,
        key: str,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        timeout_seconds: int = 30,
    ) -> None:
        self.url = url
        self._key = key
        self.max_connections = max(1, max_connections)
        self.max_keepalive_connections = max(
            1,
            min(self.max_connections, max_keepalive_connections),
        )
        self.timeout_seconds = max(1, timeout_seconds)
        self._http: httpx.Client | None = None
        self._client: Client | None = None

    @classmethod
    def from_settings(cls, config: Settings) -> SupabaseConnection:
        """Build a connection from application settings."""
        return cls(
            url=config.supabase_url,
            key=config.supabase_service_key,
            max_connections=config.supabase_http_max_connections,
            max_keepalive_connections=config.supabase_http_max_keepalive_connections,
            timeout_seconds=config.supabase_postgrest_timeout_seconds,
        )

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> Client:
        """Return the open client."""
        if self._client is None:
            raise RuntimeError("Supabase connection is not open")
        return self._client

    def open(self) -> Client:
        """Create the HTTP pool and Supabase client. Opening twice is a no-op."""
        if self._client is not None:
            return self._client

        self._http = httpx.Client(
            timeout=httpx.Timeout(self.timeout_seconds),
            limits=httpx.Limits(
                max_connections=self.max_connections,
                max_keepalive_connections=self.max_keepalive_connections,
            ),
        )
        options = SyncClientOptions(
            auto_refresh_token=False,
            persist_session=False,
            postgrest_client_timeout=self.timeout_seconds,
            storage_client_timeout=self.timeout_seconds,
            function_client_timeout=min(self.timeout_seconds, 30),
            httpx_client=self._http,
        )
        self._client = create_client(self.url, self._key, options=options)
        logger.info("Supabase connection opened for %s", self.url)
        return self._client

    def close(self) -> None:
        """Release the HTTP pool. Safe to call on a closed connection."""
        if self._http is not None:
            self._http.close()
            logger.info("Supabase connection closed")
        self._http = None
        self._client = None

    def __enter__(self) -> Client:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
