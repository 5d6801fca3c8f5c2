"""
Remote storage backends.

- ``RestKeyValueStore`` talks to a Redis REST endpoint (Upstash / Vercel KV):
  every command is POSTed as a JSON array and answered with ``{"result": ...}``
  or ``{"error": "..."}``.
- ``S3BlobStore`` keeps artifacts in an S3-compatible bucket via the MinIO
  client. The client is synchronous, so calls run in a worker thread.
"""

import asyncio
import logging
from io import BytesIO
from typing import Any

import httpx
from minio import Minio
from minio.error import S3Error

from archflow.services.storage.base import StorageError

logger = logging.getLogger(__name__)


class RestKeyValueStore:
    """Key/value store backed by a Redis REST API."""

    def __init__(
        self,
        url: str,
        token: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"}
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(10.0, connect=5.0))

    async def _command(self, *args: Any) -> Any:
        try:
            response = await self._client.post(self._url, json=list(args), headers=self._headers)
        except httpx.HTTPError as e:
            raise StorageError(f"KV request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise StorageError(f"KV returned non-JSON response ({response.status_code})") from e

        if not isinstance(payload, dict):
            raise StorageError(f"KV returned unexpected payload for {args[0]}")
        if response.status_code != 200 or "error" in payload:
            raise StorageError(f"KV command {args[0]} failed: {payload.get('error', response.status_code)}")

        return payload.get("result")

    async def get(self, key: str) -> str | None:
        result = await self._command("GET", key)
        return None if result is None else str(result)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        if ttl_seconds:
            await self._command("SET", key, value, "EX", ttl_seconds)
        else:
            await self._command("SET", key, value)

    async def delete(self, key: str) -> None:
        await self._command("DEL", key)

    async def aclose(self) -> None:
        await self._client.aclose()


class S3BlobStore:
    """Blob store backed by an S3-compatible bucket."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        secure: bool = True,
        client: Minio | None = None,
    ) -> None:
        self._client = client or Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        self._bucket = bucket
        scheme = "https" if secure else "http"
        self._base_url = f"{scheme}://{endpoint}/{bucket}"

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    async def put(self, key: str, data: str) -> str:
        body = data.encode("utf-8")
        try:
            await asyncio.to_thread(
                self._client.put_object,
                self._bucket,
                key,
                BytesIO(body),
                length=len(body),
                content_type="application/json",
            )
        except S3Error as e:
            raise StorageError(f"Blob upload failed for {key}: {e.code}") from e
        return self.url_for(key)

    def _read(self, key: str) -> str | None:
        try:
            response = self._client.get_object(self._bucket, key)
        except S3Error as e:
            if e.code in ("NoSuchKey", "NoSuchBucket"):
                return None
            raise StorageError(f"Blob read failed for {key}: {e.code}") from e
        try:
            return response.read().decode("utf-8")
        finally:
            response.close()
            response.release_conn()

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    def _stat(self, key: str) -> bool:
        try:
            self._client.stat_object(self._bucket, key)
        except S3Error as e:
            if e.code in ("NoSuchKey", "NoSuchBucket", "NoSuchObject"):
                return False
            raise StorageError(f"Blob stat failed for {key}: {e.code}") from e
        return True

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._stat, key)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._client.remove_object, self._bucket, key)
        except S3Error as e:
            raise StorageError(f"Blob delete failed for {key}: {e.code}") from e
