"""
Cliente REST mínimo usado pelos drivers.

Cada chamada é um round trip bloqueante com timeout; não há retry.
"""
from typing import Dict, Any, Optional
import logging

import requests

from esign.exceptions import ProviderRequestError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class RestApiRequester:
    """Wrapper sobre requests para APIs JSON com bearer token"""

    def __init__(self, endpoint: str, api_key: str = None, timeout: float = DEFAULT_TIMEOUT, provider: str = None):
        self.endpoint = endpoint.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.provider = provider

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key

    def set_endpoint(self, endpoint: str) -> None:
        self.endpoint = endpoint.rstrip('/')

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        if extra:
            headers.update(extra)
        return headers

    def _send(self, method: str, path: str, timeout: float = None, headers: Dict[str, str] = None, **kwargs) -> requests.Response:
        url = f"{self.endpoint}{path}"
        logger.debug(f"{method} {url}")
        return requests.request(
            method,
            url,
            headers=self._headers(headers),
            timeout=timeout or self.timeout,
            **kwargs
        )

    def _check(self, response: requests.Response) -> requests.Response:
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise ProviderRequestError(
                f"Erro {response.status_code} em {response.url}",
                provider=self.provider,
                status_code=response.status_code,
                response_body=body
            )
        return response

    def get(self, path: str, params: Dict[str, Any] = None, timeout: float = None) -> Dict[str, Any]:
        """GET que retorna o corpo JSON"""
        response = self._check(self._send('GET', path, timeout=timeout, params=params))
        return response.json()

    def get_bytes(self, path: str, timeout: float = None) -> bytes:
        """GET que retorna o conteúdo binário (ex: PDF)"""
        response = self._check(self._send('GET', path, timeout=timeout, headers={'Accept': 'application/pdf'}))
        return response.content

    def post(self, path: str, payload: Dict[str, Any] = None, timeout: float = None) -> Dict[str, Any]:
        """POST JSON que retorna o corpo JSON"""
        response = self._check(self._send('POST', path, timeout=timeout, json=payload or {}))
        return response.json()

    def post_form(self, path: str, data: Dict[str, Any], timeout: float = None) -> Dict[str, Any]:
        """
        POST application/x-www-form-urlencoded.

        Não levanta erro para respostas 4xx: endpoints OAuth devolvem o
        motivo da falha no corpo JSON ({'error': ...}).

        Raises:
            ProviderRequestError: Se a resposta não for JSON
        """
        response = self._send('POST', path, timeout=timeout, data=data)
        try:
            return response.json()
        except ValueError:
            raise ProviderRequestError(
                f"Resposta inválida de {response.url}",
                provider=self.provider,
                status_code=response.status_code,
                response_body=response.text
            )
