"""Pinata pinning service and IPFS gateway access."""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

import requests

from .. import schemas
from ..config import Settings
from ..errors import GatewayError

# purpose: pin uploads and metadata to IPFS through Pinata and probe the public gateway
# status: active
# depends_on: ideaforge.config.Settings

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

REQUEST_TIMEOUT = 60


class StorageError(GatewayError):
    """Raised when a pinning or gateway call that must succeed fails."""


def raising(message: str) -> Callable[[F], F]:
    """Operations whose failure is surfaced to the caller as ``StorageError(message)``."""

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                logger.error("%s (%s): %s", message, fn.__name__, exc, exc_info=True)
                raise StorageError(message) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def best_effort(fn: F) -> F:
    """Operations that resolve to ``False`` instead of raising."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> bool:
        try:
            return bool(fn(*args, **kwargs))
        except Exception as exc:
            logger.warning("%s failed: %s", fn.__name__, exc)
            return False

    return wrapper  # type: ignore[return-value]


def json_size(obj: Any) -> int:
    """Byte length of the two-space indented serialization of ``obj``."""

    return len(json.dumps(obj, indent=2, ensure_ascii=False).encode("utf-8"))


class ContentStorageGateway:
    def __init__(
        self,
        api_key: str,
        secret_key: str,
        *,
        api_url: str = "https://api.pinata.cloud",
        gateway_url: str = "https://gateway.pinata.cloud/ipfs/",
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.gateway_url = gateway_url
        self.session = session or requests.Session()
        # only sent to the pinning API, never to the gateway
        self._auth = {"pinata_api_key": api_key, "pinata_secret_api_key": secret_key}

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentStorageGateway":
        return cls(
            settings.pinata_api_key,
            settings.pinata_secret_key,
            api_url=settings.pinata_api_url,
            gateway_url=settings.ipfs_gateway_url,
        )

    def gateway_link(self, cid: str) -> str:
        return f"{self.gateway_url}{cid}"

    def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        resp = self.session.post(f"{self.api_url}{path}", headers=self._auth, timeout=REQUEST_TIMEOUT, **kwargs)
        resp.raise_for_status()
        return resp.json()

    def _result(self, pinned: dict[str, Any], size: int) -> schemas.UploadResult:
        cid = pinned["IpfsHash"]
        return schemas.UploadResult(
            hash=cid,
            size=size,
            url=self.gateway_link(cid),
            pin_size=int(pinned.get("PinSize") or 0),
            timestamp=schemas.now_ms(),
        )

    # -- raising ------------------------------------------------------

    @raising("Failed to upload file to IPFS")
    def upload_file(self, data: bytes, filename: str, content_type: str) -> schemas.UploadResult:
        pinned = self._post(
            "/pinning/pinFileToIPFS",
            files={"file": (filename, data, content_type)},
            data={
                "pinataMetadata": json.dumps({"name": filename}),
                "pinataOptions": json.dumps({"cidVersion": 0}),
            },
        )
        result = self._result(pinned, len(data))
        logger.info("File %s uploaded to IPFS hash=%s size=%s", filename, result.hash, result.size)
        return result

    @raising("Failed to upload JSON to IPFS")
    def upload_json(self, obj: Any, *, name: Optional[str] = None) -> schemas.UploadResult:
        pinned = self._post(
            "/pinning/pinJSONToIPFS",
            json={
                "pinataContent": obj,
                "pinataMetadata": {"name": name or f"metadata-{schemas.now_ms()}.json"},
                "pinataOptions": {"cidVersion": 0},
            },
        )
        result = self._result(pinned, json_size(obj))
        logger.info("JSON metadata uploaded to IPFS hash=%s size=%s", result.hash, result.size)
        return result

    async def upload_multiple_files(
        self, files: Sequence[tuple[bytes, str, str]]
    ) -> list[schemas.UploadResult]:
        """Upload ``(data, filename, content_type)`` triples concurrently.

        Results keep the input order. One failed upload fails the batch.
        """

        try:
            results = await asyncio.gather(
                *(asyncio.to_thread(self.upload_file, data, name, ctype) for data, name, ctype in files)
            )
        except Exception as exc:
            logger.error("Multiple file upload failed: %s", exc)
            raise StorageError("Failed to upload multiple files to IPFS") from exc
        logger.info("Uploaded %s files to IPFS: %s", len(results), [r.hash for r in results])
        return list(results)

    @raising("Failed to create directory in IPFS")
    def create_directory(self, files: Sequence[tuple[bytes, str, str]], name: str) -> str:
        """Pin several files under one wrapping directory and return its CID."""

        parts = [("file", (f"{name}/{filename}", data, ctype)) for data, filename, ctype in files]
        pinned = self._post(
            "/pinning/pinFileToIPFS",
            files=parts,
            data={
                "pinataMetadata": json.dumps({"name": name}),
                "pinataOptions": json.dumps({"cidVersion": 0}),
            },
        )
        cid = pinned["IpfsHash"]
        logger.info("Directory %s created in IPFS hash=%s files=%s", name, cid, len(parts))
        return cid

    @raising("Failed to retrieve file information")
    def get_file_info(self, cid: str) -> schemas.FileInfo:
        resp = self.session.get(self.gateway_link(cid), timeout=REQUEST_TIMEOUT, stream=True)
        try:
            resp.raise_for_status()
            length = resp.headers.get("content-length")
            return schemas.FileInfo(
                hash=cid,
                size=int(length) if length else 0,
                type=resp.headers.get("content-type") or "unknown",
                # reachable through the gateway
                pinned=True,
            )
        finally:
            resp.close()

    # -- best effort --------------------------------------------------

    @best_effort
    def pin_hash(self, cid: str) -> bool:
        self._post(
            "/pinning/pinByHash",
            json={"hashToPin": cid, "pinataMetadata": {"name": f"pinned-{cid}"}},
        )
        logger.info("Hash pinned to IPFS hash=%s", cid)
        return True

    @best_effort
    def unpin_hash(self, cid: str) -> bool:
        resp = self.session.delete(f"{self.api_url}/pinning/unpin/{cid}", headers=self._auth, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        logger.info("Hash unpinned from IPFS hash=%s", cid)
        return True

    @best_effort
    def is_pinned(self, cid: str) -> bool:
        resp = self.session.get(
            f"{self.api_url}/data/pinList",
            params={"hashContains": cid, "status": "pinned"},
            headers=self._auth,
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        return len(resp.json().get("rows") or []) > 0

    @best_effort
    def verify_hash(self, cid: str) -> bool:
        resp = self.session.head(self.gateway_link(cid), timeout=REQUEST_TIMEOUT, allow_redirects=True)
        return resp.ok
