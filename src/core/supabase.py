from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from src.core.config import Settings


class _SharedHttpClient:
    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    @classmethod
    def get(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client


class SupabaseClient:
    """PostgREST access with the service role key."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None) -> None:
        self.base_url = settings.supabase_url.rstrip("/") + "/rest/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self._client = http_client or _SharedHttpClient.get(settings.supabase_timeout_seconds)

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[List[Tuple[str, str]]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: List[Tuple[str, str]] = [("select", select)]
        if filters:
            params.extend(filters)
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset is not None:
            params.append(("offset", str(offset)))
        if order:
            params.append(("order", order))

        url = f"{self.base_url}/{table}?{urlencode(params, doseq=True)}"
        response = self._client.get(url, headers=self._headers())
        response.raise_for_status()
        return response.json()

    def insert(self, table: str, payload: Dict[str, Any] | List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        headers = {
            **self._headers(),
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        response = self._client.post(f"{self.base_url}/{table}", headers=headers, json=payload)
        response.raise_for_status()
        return _as_rows(response)

    def update(
        self,
        table: str,
        payload: Dict[str, Any],
        filters: List[Tuple[str, str]],
    ) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{table}?{urlencode(filters, doseq=True)}"
        headers = {
            **self._headers(),
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        response = self._client.patch(url, headers=headers, json=payload)
        response.raise_for_status()
        return _as_rows(response)


class SupabaseAuthClient:
    """GoTrue endpoints used for sign-in, sessions and account provisioning."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None) -> None:
        self.base_url = settings.supabase_url.rstrip("/") + "/auth/v1"
        self.anon_key = settings.supabase_anon_key or settings.supabase_service_role_key
        self.service_role_key = settings.supabase_service_role_key
        if not self.anon_key:
            raise ValueError("Supabase API key is required")
        self._client = http_client or _SharedHttpClient.get(settings.supabase_timeout_seconds)

    def _user_headers(self, access_token: str) -> Dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token}",
        }

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        response = self._client.post(
            f"{self.base_url}/token?grant_type=password",
            headers={"apikey": self.anon_key, "Content-Type": "application/json"},
            json={"email": email, "password": password},
        )
        response.raise_for_status()
        return response.json()

    def get_user(self, access_token: str) -> Dict[str, Any]:
        response = self._client.get(f"{self.base_url}/user", headers=self._user_headers(access_token))
        response.raise_for_status()
        return response.json()

    def sign_out(self, access_token: str) -> None:
        response = self._client.post(f"{self.base_url}/logout", headers=self._user_headers(access_token))
        response.raise_for_status()

    def update_user_password(self, access_token: str, password: str) -> Dict[str, Any]:
        response = self._client.put(
            f"{self.base_url}/user",
            headers={**self._user_headers(access_token), "Content-Type": "application/json"},
            json={"password": password},
        )
        response.raise_for_status()
        return response.json()

    def admin_create_user(self, email: str, password: str, email_confirm: bool = True) -> Dict[str, Any]:
        if not self.service_role_key:
            raise ValueError("Supabase service role key is required for admin operations")
        response = self._client.post(
            f"{self.base_url}/admin/users",
            headers={
                "apikey": self.service_role_key,
                "Authorization": f"Bearer {self.service_role_key}",
                "Content-Type": "application/json",
            },
            json={"email": email, "password": password, "email_confirm": email_confirm},
        )
        response.raise_for_status()
        return response.json()


def _as_rows(response: httpx.Response) -> List[Dict[str, Any]]:
    if not response.content:
        return []
    data = response.json()
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return [data]
    return []


def provider_error_message(exc: httpx.HTTPError, fallback: str) -> str:
    """Best-effort extraction of the message GoTrue/PostgREST put in an error body."""
    if not isinstance(exc, httpx.HTTPStatusError):
        return fallback
    try:
        body = exc.response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback
