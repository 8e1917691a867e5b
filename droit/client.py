"""
Client de l'API distante DROIT (mode « serveur ») — statut, liste et création d'actualités.

Appels bloquants avec timeout fourni par l'appelant ; aucun réessai :
toute réponse non-2xx est un échec définitif de l'appel (ApiError).
"""
import logging
import os
from typing import Any, Optional

import requests as http

from .errors import ApiError

log = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "http://localhost:8787/api"


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[http.Session] = None):
        self.base_url = (base_url or os.getenv("DROIT_API_URL", _DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = timeout if timeout is not None else float(os.getenv("DROIT_API_TIMEOUT", "10"))
        self.session = session or http.Session()

    def _request(self, method: str, endpoint: str, json: Any = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(
                method, url, json=json, timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        except http.RequestException as exc:
            log.error("API %s %s : %s", method, url, exc)
            raise ApiError(f"API injoignable : {exc}") from exc

        if not resp.ok:
            log.error("API %s %s → %s", method, url, resp.status_code)
            raise ApiError(f"API error: {resp.status_code} {resp.reason}", status=resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError("Réponse API non JSON", status=resp.status_code) from exc

    def get_status(self) -> dict:
        return self._request("GET", "")

    def get_news(self) -> list:
        return self._request("GET", "/news")

    def create_news_item(self, data: dict) -> dict:
        return self._request("POST", "/news", json=data)
