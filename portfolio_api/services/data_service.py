"""
services/data_service.py — Backing Data Service client (Supabase)

Thin async wrapper over the hosted database/auth provider. Rows go through
the PostgREST API (/rest/v1), credentials through the GoTrue API (/auth/v1).
The gateway owns no schema: rows are plain dicts passed through verbatim.

Business Rules:
- One shared DataService per process, built at startup (see main.py)
- Every request carries the project key as `apikey`
- Non-2xx responses raise DataServiceError with the provider's raw error body
- Transport failures raise DataServiceError(503); nothing is retried

Called by: dependencies.py (token check), routers/*.py
Depends on: http_client.py (shared httpx.AsyncClient)
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

# PostgREST returns a bare object instead of a one-element array with this media type
_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class DataServiceError(Exception):
    """A failed call to the backing service.

    `payload` is the provider's error object exactly as it returned it, so
    routes can forward it without reshaping.
    """

    def __init__(self, payload: dict, status_code: int = 400):
        self.payload = payload
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def message(self) -> str:
        for key in ("message", "msg", "error_description", "error"):
            value = self.payload.get(key)
            if isinstance(value, str) and value:
                return value
        return f"Backing service error ({self.status_code})"


def _error_from_response(resp: httpx.Response) -> DataServiceError:
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        payload = {"message": resp.text or resp.reason_phrase}
    return DataServiceError(payload, resp.status_code)


def _decode(resp: httpx.Response, path: str) -> Any:
    """JSON body of a 2xx response; an undecodable body counts as an upstream failure."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as exc:
        logger.warning(f"Backing service sent a non-JSON body for {path}: {resp.text[:200]!r}")
        raise DataServiceError({"message": "Invalid response from backing service"}, 502) from exc


def _eq_filters(match: dict[str, Any]) -> dict[str, str]:
    return {column: f"eq.{value}" for column, value in match.items()}


class DataService:
    """Supabase REST + auth client bound to one project."""

    def __init__(self, base_url: str, api_key: str, client: httpx.AsyncClient):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.client = client

    # ── Plumbing ─────────────────────────────────────────────────────

    def _headers(self, token: str | None = None, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
        }
        headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
        headers: dict | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = await self.client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning(f"Backing service unreachable: {method} {path}: {exc}")
            raise DataServiceError({"message": str(exc) or type(exc).__name__}, 503) from exc
        if resp.status_code >= 400:
            err = _error_from_response(resp)
            logger.info(f"Backing service rejected {method} {path}: {resp.status_code} {err.message}")
            raise err
        return resp

    # ── Auth ─────────────────────────────────────────────────────────

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        """Exchange email/password for a session ({access_token, user, ...})."""
        resp = await self._send(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        session = _decode(resp, "/auth/v1/token")
        if not isinstance(session, dict) or not session.get("access_token"):
            raise DataServiceError({"message": "Login response carried no access token"}, 502)
        return session

    async def get_user(self, token: str) -> dict:
        """Resolve a bearer token to the identity it was issued for."""
        resp = await self._send("GET", "/auth/v1/user", headers=self._headers(token))
        user = _decode(resp, "/auth/v1/user")
        if not isinstance(user, dict) or not user.get("id"):
            raise DataServiceError({"message": "No user for token"}, 401)
        return user

    # ── Rows ─────────────────────────────────────────────────────────

    async def select(
        self,
        table: str,
        *,
        order: str | None = None,
        ascending: bool = True,
        single: bool = False,
    ) -> Any:
        """All rows of `table`, optionally ordered; one object when `single`."""
        params = {"select": "*"}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        headers = self._headers(Accept=_SINGLE_OBJECT) if single else self._headers()
        resp = await self._send("GET", f"/rest/v1/{table}", params=params, headers=headers)
        return _decode(resp, f"/rest/v1/{table}")

    async def insert(self, table: str, rows: list[dict], *, returning: bool = True) -> list[dict]:
        prefer = "return=representation" if returning else "return=minimal"
        resp = await self._send(
            "POST",
            f"/rest/v1/{table}",
            json=rows,
            headers=self._headers(Prefer=prefer),
        )
        if not returning:
            return []
        return _decode(resp, f"/rest/v1/{table}") or []

    async def update(self, table: str, values: dict, match: dict[str, Any]) -> list[dict]:
        """Apply `values` to rows equal on every `match` column; returns updated rows."""
        params = {"select": "*", **_eq_filters(match)}
        resp = await self._send(
            "PATCH",
            f"/rest/v1/{table}",
            params=params,
            json=values,
            headers=self._headers(Prefer="return=representation"),
        )
        return _decode(resp, f"/rest/v1/{table}") or []

    async def delete(self, table: str, match: dict[str, Any]) -> None:
        await self._send(
            "DELETE",
            f"/rest/v1/{table}",
            params=_eq_filters(match),
            headers=self._headers(Prefer="return=minimal"),
        )
