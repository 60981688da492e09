"""Shared async HTTP plumbing for the remote PTV-style services."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..exceptions import ConnectivityError, ServiceResponseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_payload(response: httpx.Response) -> Any:
    """Return the remote error body unchanged, falling back to its text."""
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}


class ServiceClient:
    """Base client adding the API key header and translating failures."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.api_key
        if not self.api_key:
            raise ValueError("API key is not configured.")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        """Create a short-lived client; each request gets its own connection."""
        return httpx.AsyncClient(
            headers={"apiKey": self.api_key},
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with self._get_client() as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.TimeoutException as exc:
                logger.warning(f"{method} {url} timed out: {exc}")
                raise ConnectivityError(f"Request to {url} timed out.") from exc
            except httpx.TransportError as exc:
                logger.warning(f"{method} {url} failed: {exc}")
                raise ConnectivityError(f"Failed to reach {self.base_url}: {exc}") from exc

        if response.is_success:
            logger.debug(f"{method} {url} -> {response.status_code}")
            return response

        payload = _error_payload(response)
        logger.error(f"{method} {url} -> {response.status_code}: {payload}")
        raise ServiceResponseError(
            f"Service responded with HTTP {response.status_code}.",
            status_code=response.status_code,
            payload=payload,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceResponseError(
                "Service returned a body that is not valid JSON.",
                status_code=response.status_code,
                payload={"message": response.text},
            ) from exc

    @classmethod
    def _parse(cls, model: type[ModelT], response: httpx.Response) -> ModelT:
        data = cls._json(response)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ServiceResponseError(
                f"Service returned an unexpected {model.__name__} payload.",
                status_code=response.status_code,
                payload=data,
            ) from exc
