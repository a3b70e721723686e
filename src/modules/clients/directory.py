"""Client Directory: resolves a customer tax id (CPF) to a client record.

``IClientDirectory`` is the contract the order validator depends on.
``ClientApiDirectory`` implements it over HTTP against the external
client API (``GET {CLIENT_API_URL}/clients/{cpf}``).

Outcome mapping:
- 200 → ``ClientRecord``
- 404 → ``None``
- anything else (other status codes, timeouts, connection errors,
  malformed bodies) → ``ClientApiError``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional
from urllib.parse import quote

import requests
import structlog
from django.conf import settings
from pydantic import ValidationError as PydanticValidationError

from modules.clients.dtos import ClientRecord
from modules.clients.exceptions import ClientApiError

logger = structlog.get_logger(__name__)

COMMUNICATION_ERROR_MESSAGE = "Error communicating with Client API"


class IClientDirectory(ABC):
    @abstractmethod
    def get_client_by_tax_id(self, tax_id: str) -> Optional[ClientRecord]:
        """Return the client registered under *tax_id*, or ``None``.

        Raises:
            ClientApiError: the directory could not answer.
        """


class ClientApiDirectory(IClientDirectory):
    """HTTP adapter for the external client API (blocking, via ``requests``)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = (base_url or settings.CLIENT_API_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.CLIENT_API_TIMEOUT
        self._session = session or requests.Session()

    def get_client_by_tax_id(self, tax_id: str) -> Optional[ClientRecord]:
        url = f"{self._base_url}/clients/{quote(tax_id, safe='')}"
        log = logger.bind(url=url)

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            log.error("client_api.request_failed", error=type(exc).__name__)
            raise ClientApiError(COMMUNICATION_ERROR_MESSAGE) from exc

        if response.status_code == 404:
            log.info("client_api.client_not_found")
            return None

        try:
            response.raise_for_status()
            record = ClientRecord.model_validate(response.json())
        except (requests.HTTPError, ValueError, PydanticValidationError) as exc:
            log.error(
                "client_api.bad_response",
                status_code=response.status_code,
                error=type(exc).__name__,
            )
            raise ClientApiError(COMMUNICATION_ERROR_MESSAGE) from exc

        log.info("client_api.client_found")
        return record


@lru_cache(maxsize=1)
def default_client_directory() -> ClientApiDirectory:
    """Process-wide directory; every request reuses its session's connection pool."""
    return ClientApiDirectory()
