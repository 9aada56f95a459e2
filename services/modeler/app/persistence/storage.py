"""Artifact storage helpers (S3/MinIO)."""
from __future__ import annotations

import hashlib
import json
import os
import re
from typing import Any

import aioboto3
from botocore.exceptions import ClientError

from ..config import ModelerSettings, StorageSettings

_DIGEST = re.compile(r"^[0-9a-f]{64}$")


class ArtifactNotFound(LookupError):
    """Raised when no artifact exists for a digest."""


class ArtifactStorage:
    """Persist generated specifications to S3/MinIO using content-hash identifiers."""

    def __init__(self, settings: ModelerSettings) -> None:
        self._settings: StorageSettings = settings.storage

    async def put_json(self, data: dict[str, Any]) -> tuple[str, str]:
        """Store JSON data and return the digest plus a content-hash reference."""
        payload = json.dumps(data, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return await self._put_bytes(payload, suffix=".json")

    async def get_json(self, digest: str) -> dict[str, Any]:
        if not _DIGEST.match(digest):
            raise ArtifactNotFound(digest)
        payload = await self._get_bytes(f"{digest}.json")
        return json.loads(payload.decode("utf-8"))

    async def _put_bytes(self, payload: bytes, suffix: str = "") -> tuple[str, str]:
        digest = hashlib.sha256(payload).hexdigest()
        key = f"artifacts/{digest}{suffix}"

        if not self._settings.s3_bucket:
            # Dev mode: write to local file system for traceability
            path = os.path.join(self._settings.artifact_dir, f"{digest}{suffix}")
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            with open(path, "wb") as handle:
                handle.write(payload)
            return digest, f"file://{path}"

        session = aioboto3.Session()
        async with session.client(
            "s3",
            endpoint_url=self._settings.s3_endpoint,
            region_name=self._settings.s3_region,
        ) as client:
            await client.put_object(Bucket=self._settings.s3_bucket, Key=key, Body=payload)
        return digest, f"s3://{self._settings.s3_bucket}/{key}"

    async def _get_bytes(self, name: str) -> bytes:
        if not self._settings.s3_bucket:
            path = os.path.join(self._settings.artifact_dir, name)
            if not os.path.exists(path):
                raise ArtifactNotFound(name)
            with open(path, "rb") as handle:
                return handle.read()

        session = aioboto3.Session()
        async with session.client(
            "s3",
            endpoint_url=self._settings.s3_endpoint,
            region_name=self._settings.s3_region,
        ) as client:
            try:
                response = await client.get_object(Bucket=self._settings.s3_bucket, Key=f"artifacts/{name}")
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") in {"NoSuchKey", "404"}:
                    raise ArtifactNotFound(name) from exc
                raise
            async with response["Body"] as body:
                return await body.read()


__all__ = ["ArtifactNotFound", "ArtifactStorage"]
