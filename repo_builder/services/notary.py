"""
Notary signing service client.

Release files are signed remotely: the file is uploaded to the notary
service, which returns a detached signature that is stored next to it.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional, Union

import httpx

from ..models.config import NotaryConfig
from ..utils.constants import NOTARY_OUTPUT_KEY_PREFIX, NOTARY_SIGN_ENDPOINT
from ..utils.error_handling import SigningError, handle_http_error
from ..utils.output_store import OutputStore
from ..utils.session import create_session_with_retry


class NotarySigner:
    """
    Signs files through the notary service.

    Implements the SignerProtocol. The HTTP client is created on first use
    and shared by every job of a run.
    """

    def __init__(
        self,
        config: NotaryConfig,
        output_store: Optional[OutputStore] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Initialize the signer.

        Args:
            config: Notary connection settings
            output_store: Optional store for recording signing responses
            client: Optional preconfigured httpx client
        """
        self.config = config
        self.output_store = output_store
        self._client = client
        self._client_lock = threading.Lock()

    def _auth_headers(self) -> Dict[str, str]:
        if not self.config.auth_token_file:
            return {}

        token_path = Path(self.config.auth_token_file).expanduser()
        try:
            token = token_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise SigningError(f"reading notary token from '{token_path}': {e}") from e

        return {"Authorization": f"Bearer {token}"}

    @property
    def client(self) -> httpx.Client:
        """HTTP client used for notary requests."""
        with self._client_lock:
            if self._client is None:
                self._client = create_session_with_retry(timeout=self.config.timeout, headers=self._auth_headers())
            return self._client

    def sign(self, file_path: Union[str, os.PathLike], extension: str, overwrite: bool) -> None:
        """
        Sign a file and write the detached signature to ``<file>.<extension>``.

        A signature older than the file belongs to a previous version of it
        and is always replaced. A signature newer than the file is only
        replaced when ``overwrite`` is set. The previous signature is removed
        before the request, so a failure never leaves it next to the file.

        Args:
            file_path: File to sign
            extension: Signature file extension (e.g. "gpg")
            overwrite: Replace a signature that is current for the file

        Raises:
            SigningError: If a current signature exists and overwrite is
                False, or the notary request fails
        """
        file_path = Path(file_path)
        signature_path = file_path.with_name(f"{file_path.name}.{extension}")

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise SigningError(f"reading '{file_path}' for signing: {e}") from e

        _remove_previous_signature(signature_path, file_path, overwrite)

        logging.info("Signing %s with key %s", file_path, self.config.key_name)
        try:
            response = self.client.post(
                f"{self.config.url}{NOTARY_SIGN_ENDPOINT}",
                data={"key_name": self.config.key_name, "comment": self.config.comment, "extension": extension},
                files={"file": (file_path.name, content)},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            handle_http_error(e, f"signing {file_path}", log_traceback=False)
            raise SigningError(f"notary request for '{file_path}' failed: {e}") from e

        if not response.content:
            raise SigningError(f"notary returned an empty signature for '{file_path}'")

        try:
            signature_path.write_bytes(response.content)
        except OSError as e:
            raise SigningError(f"writing signature '{signature_path}': {e}") from e

        if self.output_store is not None:
            self.output_store.record(
                f"{NOTARY_OUTPUT_KEY_PREFIX}{file_path}",
                f"signed {file_path.name} with {self.config.key_name} -> {signature_path.name} "
                f"({len(response.content)} bytes)",
            )

        logging.info("Wrote signature to: %s", signature_path)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logging.debug("Notary client closed")

    def __enter__(self) -> "NotarySigner":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _remove_previous_signature(signature_path: Path, file_path: Path, overwrite: bool) -> None:
    try:
        signature_mtime = signature_path.stat().st_mtime_ns
    except FileNotFoundError:
        return
    except OSError as e:
        raise SigningError(f"checking existing signature {signature_path}: {e}") from e

    if not overwrite and signature_mtime > file_path.stat().st_mtime_ns:
        raise SigningError(f"signed file {signature_path} exists, not overwriting")

    # a failed request must not leave the old signature next to the new file
    try:
        signature_path.unlink()
    except OSError as e:
        raise SigningError(f"removing previous signature {signature_path}: {e}") from e
    logging.debug("Removed previous signature %s", signature_path)


__all__ = ["NotarySigner"]
