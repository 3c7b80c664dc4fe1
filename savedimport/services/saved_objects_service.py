"""
Saved objects store client.

Creates saved objects in bulk through the store's HTTP API. Namespaces
(tenants) other than the default one are addressed with a ``/s/{namespace}``
path prefix.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from savedimport.exceptions import StoreError
from savedimport.schemas.saved_objects import BulkCreateResponse, SavedObject
from savedimport.settings import settings

logger = logging.getLogger(__name__)


class SavedObjectsStore(Protocol):
    """Bulk create capability of a saved objects store."""

    async def bulk_create(
        self,
        objects: Sequence[SavedObject],
        *,
        namespace: str | None = None,
        overwrite: bool = False,
    ) -> BulkCreateResponse:
        """
        Create objects in one round trip.

        Returns exactly one outcome per object, in submission order. Per-object
        failures are returned as outcomes; only call-level faults raise.
        """
        ...


class SavedObjectsService:
    """HTTP client for the saved objects API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        api_key: str | None = None,
        default_namespace: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.saved_objects_url).rstrip("/")
        self.timeout = settings.saved_objects_timeout if timeout is None else timeout
        self.api_key = settings.saved_objects_api_key if api_key is None else api_key
        self.default_namespace = (
            settings.default_namespace
            if default_namespace is None
            else default_namespace
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"kbn-xsrf": "savedimport"}
            if self.api_key:
                headers["Authorization"] = f"ApiKey {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _namespace_prefix(self, namespace: str | None) -> str:
        if namespace is None or namespace == self.default_namespace:
            return ""
        return f"/s/{namespace}"

    async def bulk_create(
        self,
        objects: Sequence[SavedObject],
        *,
        namespace: str | None = None,
        overwrite: bool = False,
    ) -> BulkCreateResponse:
        """
        Create saved objects in bulk.

        Args:
            objects: Objects to create, in the order outcomes are expected
            namespace: Target namespace, None for the default namespace
            overwrite: Whether existing objects at the same ID may be replaced

        Returns:
            BulkCreateResponse with one outcome per object

        Raises:
            httpx.HTTPStatusError: If the store returns an error response
            StoreError: If the response body is not a bulk create response
        """
        client = await self._get_client()
        path = f"{self._namespace_prefix(namespace)}/api/saved_objects/_bulk_create"

        logger.info(
            "Bulk creating %d saved objects (namespace=%s, overwrite=%s)",
            len(objects),
            namespace,
            overwrite,
        )

        response = await client.post(
            path,
            params={"overwrite": "true" if overwrite else "false"},
            json=[obj.to_document() for obj in objects],
        )
        logger.debug("Bulk create responded with status %d", response.status_code)
        response.raise_for_status()

        try:
            return BulkCreateResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise StoreError(f"Malformed bulk create response: {e}") from e

    async def health_check(self) -> bool:
        """Check if the saved objects API is reachable."""
        try:
            client = await self._get_client()
            response = await client.get("/api/status")
            return response.status_code == 200
        except httpx.HTTPError:
            return False
