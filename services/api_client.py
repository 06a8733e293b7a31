# -*- coding: utf-8 -*-
"""
Rental API Client
=================

Single HTTP transport for the rental backend (/api/*).

The backend answers with an envelope:
    {"success": true, "data": ...}
    {"success": false, "error": {"message": "..."}}

`_request` unwraps the success envelope and turns every failure into an
ApiException (HTTP status preserved) or a NetworkException. Calls are made
once; there is no retry policy.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
import urllib3

from app.config import Config
from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """
    Connection settings for the backend.

    Values left as None are loaded from Config (which reads .env).

    Example .env:
        API_BASE_URL=http://localhost:5000
        API_TIMEOUT=30
        API_VERIFY_SSL=false
    """
    base_url: str = None
    timeout: int = None
    verify_ssl: bool = None

    def __post_init__(self):
        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL


class RentalApiClient:
    """
    HTTP client for the rental backend.

    Authentication is owned by the host session: the bearer token is handed
    in through set_access_token() and attached to every request.

    Usage:
        client = RentalApiClient(ApiConfig(base_url="http://localhost:5000"))
        client.set_access_token(session_token)
        data = client.get("/api/agreements/abc123")
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.access_token: Optional[str] = None

        if not self.config.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ==================== Authentication ====================

    def set_access_token(self, token: Optional[str]):
        """Set (or clear) the bearer token taken from the current session."""
        self.access_token = token
        logger.debug("Access token updated" if token else "Access token cleared")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    # ==================== Transport ====================

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request and return the unwrapped payload.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "/api/agreements")
            json_data: JSON payload
            params: Query parameters

        Returns:
            The envelope's "data" member, or the raw body when not enveloped.

        Raises:
            ApiException: the server answered with an error status
            NetworkException: the request never produced a usable response
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data:
            logger.debug(f"[API REQ] Body: {json.dumps(json_data, ensure_ascii=False, default=str)}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()

            result = None
            if response.text:
                result = response.json()

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                res_str = json.dumps(result, ensure_ascii=False, default=str)
                if len(res_str) > 1000:
                    logger.debug(f"[API RES] Body (truncated): {res_str[:1000]}...")
                else:
                    logger.debug(f"[API RES] Body: {res_str}")

            return self._unwrap(result)

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except ValueError:
                pass
            if not isinstance(response_data, dict):
                response_data = {"data": response_data}
            message = self._error_message(response_data) or str(e)
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | {message}")
            raise ApiException(
                message=message,
                status_code=status_code,
                response_data=response_data,
                context=f"{method} {endpoint}"
            )
        except ValueError as e:
            # 2xx with a body that is not JSON
            logger.error(f"[API ERR] Invalid JSON from {method} {endpoint}: {e}")
            raise NetworkException(
                message=f"Invalid response from server: {e}",
                original_error=e,
                context=f"{method} {endpoint}"
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"[API ERR] Network error: {method} {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e,
                context=f"{method} {endpoint}"
            )

    @staticmethod
    def _unwrap(result: Any) -> Any:
        if isinstance(result, dict) and "success" in result:
            if result.get("success") is False:
                message = RentalApiClient._error_message(result) or "Request failed"
                raise ApiException(message=message, status_code=0, response_data=result)
            return result.get("data")
        return result

    @staticmethod
    def _error_message(response_data: Dict[str, Any]) -> str:
        error = response_data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        message = response_data.get("message")
        return str(message) if message else ""

    # ==================== Verbs ====================

    def get(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, json_data: Optional[Dict] = None) -> Any:
        return self._request("POST", endpoint, json_data=json_data)

    def put(self, endpoint: str, json_data: Optional[Dict] = None) -> Any:
        return self._request("PUT", endpoint, json_data=json_data)


# ==================== Singleton ====================

_api_client_instance: Optional[RentalApiClient] = None


def get_api_client(config: Optional[ApiConfig] = None) -> RentalApiClient:
    """
    Return the shared RentalApiClient.

    Args:
        config: used only when the client is first created
    """
    global _api_client_instance

    if _api_client_instance is None:
        _api_client_instance = RentalApiClient(config)

    return _api_client_instance


def reset_api_client():
    """Drop the shared client (tests, logout)."""
    global _api_client_instance
    _api_client_instance = None
