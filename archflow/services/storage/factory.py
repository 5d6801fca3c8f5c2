"""Build storage backends from settings."""

import logging

from archflow.config import Settings
from archflow.services.storage.base import BlobStore, KeyValueStore
from archflow.services.storage.memory import MemoryBlobStore, MemoryKeyValueStore
from archflow.services.storage.remote import RestKeyValueStore, S3BlobStore

logger = logging.getLogger(__name__)


def build_stores(config: Settings) -> tuple[KeyValueStore, BlobStore]:
    """
    Create the key/value and blob stores selected by configuration.

    Falls back to in-memory stores when remote storage is selected but the
    KV endpoint is not configured.
    """
    if config.storage_backend == "remote" and not config.remote_storage_enabled:
        logger.warning("storage_backend=remote but KV_REST_API_URL is unset; using in-memory storage")

    if not config.remote_storage_enabled:
        logger.info("Using in-memory storage backends")
        return MemoryKeyValueStore(), MemoryBlobStore()

    logger.info(f"Using remote storage: KV at {config.kv_rest_api_url}, bucket {config.blob_bucket}")
    kv = RestKeyValueStore(config.kv_rest_api_url, config.kv_rest_api_token)
    blobs = S3BlobStore(
        endpoint=config.blob_endpoint,
        access_key=config.blob_access_key,
        secret_key=config.blob_secret_key,
        bucket=config.blob_bucket,
        secure=config.blob_secure,
    )
    return kv, blobs
