"""CurseForge upload API client."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from ..constants import HTTP_TIMEOUT, TOKEN_HEADER, UPLOAD_PATH
from ..errors import AuthError, NetworkError, ParseError, UploadError

logger = logging.getLogger(__name__)


class CurseForgeClient:
    """Thin synchronous wrapper over the CurseForge upload API.

    Args:
        endpoint: Base URL of the game specific API.
        token: API token sent with every request.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self._client = httpx.Client(
            base_url=self.endpoint,
            headers={TOKEN_HEADER: token},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "CurseForgeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_text(self, path: str) -> str:
        """GET an API path and return the response body.

        Raises:
            AuthError: If the token is rejected.
            NetworkError: On transport failure or any other non-success status.
        """
        logger.debug(f"GET {self.endpoint}{path}")
        try:
            response = self._client.get(path)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to reach {self.endpoint}{path}: {e}") from e

        if response.status_code in (401, 403):
            raise AuthError(
                f"CurseForge rejected the API token ({response.status_code}) for {path}"
            )
        if not response.is_success:
            raise NetworkError(
                f"Unexpected response {response.status_code} from {path}: {response.text}"
            )
        return response.text

    def upload_file(self, project_id: int, metadata: dict[str, Any], file: Path) -> int:
        """Upload a file and return the id the API assigned to it.

        Raises:
            UploadError: If the API rejects the upload.
            NetworkError: On transport failure.
            ParseError: If the response does not contain a file id.
        """
        path = UPLOAD_PATH.format(project_id=project_id)
        logger.debug(f"POST {self.endpoint}{path} ({file.name})")
        try:
            with open(file, "rb") as f:
                response = self._client.post(
                    path,
                    data={"metadata": json.dumps(metadata)},
                    files={"file": (file.name, f, "application/octet-stream")},
                )
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to upload {file.name}: {e}") from e
        except OSError as e:
            raise UploadError(f"Could not read {file}: {e}") from e

        if not response.is_success:
            detail = _error_detail(response)
            raise UploadError(
                f"Upload of {file.name} to project {project_id} failed "
                f"({response.status_code}): {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            file_id = response.json()["id"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ParseError(
                f"Unexpected upload response from CurseForge API. Response '{response.text}'.",
                body=response.text,
            ) from e
        if not isinstance(file_id, int) or isinstance(file_id, bool):
            raise ParseError(
                f"Upload response id is not an integer. Response '{response.text}'.",
                body=response.text,
            )
        return file_id


def _error_detail(response: httpx.Response) -> str:
    """Extract the server's error message, falling back to the raw body."""
    try:
        data = response.json()
    except json.JSONDecodeError:
        return response.text
    if isinstance(data, dict) and data.get("errorMessage"):
        return str(data["errorMessage"])
    return response.text
