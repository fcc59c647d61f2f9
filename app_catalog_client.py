"""App catalog API client.

A small synchronous client for the catalog HTTP API built on the
``requests`` library.  It exposes one method per endpoint:

* :meth:`AppCatalogClient.list_apps` – every app, newest first.
* :meth:`AppCatalogClient.list_featured` – the two newest apps.
* :meth:`AppCatalogClient.list_recent` – the four newest apps.
* :meth:`AppCatalogClient.get_app` – one app by identifier.
* :meth:`AppCatalogClient.upload_app` – upload a package with its metadata.

Every method returns a ``(data, error)`` tuple.  On success ``data``
holds the ``data`` member of the response envelope and ``error`` is
``None``.  On failure ``data`` is empty (``[]`` or ``None``) and
``error`` is a dictionary with ``status_code`` and ``message`` keys;
``status_code`` is ``None`` when the server could not be reached.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

APK_CONTENT_TYPE = "application/vnd.android.package-archive"


class AppCatalogClient:
    """Client for interacting with the app catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        data: Dict[str, Any] | None = None,
        files: Dict[str, Any] | None = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Perform an HTTP request against ``/api<path>``.

        Returns:
            A tuple ``(envelope, error)``.  ``envelope`` is the parsed JSON
            body on success.  On failure it is ``None`` and ``error``
            describes the problem.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                data=data,
                files=files,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json(), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except ValueError as exc:
            # requests.JSONDecodeError is both a ValueError and a
            # RequestException; it must be handled first.
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": None, "message": "Invalid JSON response"}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        envelope, error = self._request("GET", path)
        if error:
            return [], error
        data = envelope.get("data") if isinstance(envelope, dict) else None
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------
    def list_apps(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve every app, most recently uploaded first."""
        return self._list("/apps")

    def list_featured(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list("/apps/featured")

    def list_recent(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._list("/apps/recent")

    def get_app(self, app_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve a single app by ID.

        Returns:
            A tuple ``(app, error)``.  An unknown ID yields an error with
            ``status_code`` 404.
        """
        envelope, error = self._request("GET", f"/apps/{quote(str(app_id), safe='')}")
        if error:
            return None, error
        return envelope.get("data"), None

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------
    def upload_app(
        self,
        *,
        name: str,
        description: str,
        version: str,
        github_link: str,
        apk_path: Optional[str] = None,
        apk_bytes: Optional[bytes] = None,
        filename: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Upload an app package with its metadata.

        Either ``apk_path`` (a file on disk) or ``apk_bytes`` together
        with ``filename`` must be given.

        Returns:
            A tuple ``(app, error)`` where ``app`` is the stored record.
        """
        if apk_path is not None:
            with open(apk_path, "rb") as f:
                apk_bytes = f.read()
            filename = filename or os.path.basename(apk_path)
        if apk_bytes is None or not filename:
            raise ValueError("upload_app requires apk_path or apk_bytes with filename")

        form = {
            "name": name,
            "description": description,
            "version": version,
            "githubLink": github_link,
        }
        files = {"apk": (filename, apk_bytes, APK_CONTENT_TYPE)}
        envelope, error = self._request("POST", "/upload", data=form, files=files)
        if error:
            return None, error
        return envelope.get("data"), None
