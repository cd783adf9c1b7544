"""
Autenticação DocuSign via JWT bearer grant (impersonação de usuário).
"""
from typing import Dict, Any
from urllib.parse import urlencode
import logging
import time

import jwt

from esign.exceptions import AuthConsentRequiredError, AuthUnexpectedError
from esign.utils.requester import RestApiRequester

logger = logging.getLogger(__name__)

JWT_GRANT_TYPE = 'urn:ietf:params:oauth:grant-type:jwt-bearer'
SCOPE = 'signature impersonation'
# DocuSign não aceita asserções com validade maior que 1 hora
ASSERTION_LIFETIME = 3600


class DocusignAuth:
    """
    Troca as credenciais de longa duração por um access token.

    Resultados possíveis de request_access_token():
        - token de acesso (str)
        - AuthConsentRequiredError com a URL de consentimento
        - AuthUnexpectedError para qualquer outra falha
    """

    def __init__(self, requester: RestApiRequester, integrator_key: str, user_id: str, private_key: str, redirect_uri: str):
        self.requester = requester
        self.integrator_key = integrator_key
        self.user_id = user_id
        self.private_key = private_key
        self.redirect_uri = redirect_uri

    @property
    def auth_host(self) -> str:
        """Host do servidor de autenticação, sem esquema (claim 'aud')"""
        return self.requester.endpoint.split('://', 1)[-1]

    def build_claims(self, now: int = None) -> Dict[str, Any]:
        now = int(now if now is not None else time.time())
        return {
            'iss': self.integrator_key,
            'sub': self.user_id,
            'aud': self.auth_host,
            'scope': SCOPE,
            'nbf': now,
            'iat': now,
            'exp': now + ASSERTION_LIFETIME,
        }

    def build_assertion(self, now: int = None) -> str:
        """Gera a asserção JWT assinada com RS256"""
        return jwt.encode(self.build_claims(now), self.private_key, algorithm='RS256')

    def build_consent_url(self) -> str:
        query = urlencode({
            'response_type': 'code',
            'scope': SCOPE,
            'client_id': self.integrator_key,
            'redirect_uri': self.redirect_uri,
        })
        return f"{self.requester.endpoint}/oauth/auth?{query}"

    def request_access_token(self) -> str:
        """
        Solicita o access token no endpoint /oauth/token.

        Returns:
            access_token

        Raises:
            AuthConsentRequiredError: Usuário precisa conceder consentimento
            AuthUnexpectedError: Qualquer outro erro do servidor de autenticação
        """
        data = self.requester.post_form('/oauth/token', {
            'grant_type': JWT_GRANT_TYPE,
            'assertion': self.build_assertion(),
        })

        error = data.get('error')
        if error == 'consent_required':
            consent_url = self.build_consent_url()
            logger.warning(f"DocuSign requer consentimento do usuário {self.user_id}: {consent_url}")
            raise AuthConsentRequiredError(consent_url, provider='docusign')

        if error or not data.get('access_token'):
            logger.error(f"Erro inesperado do DocuSign ao solicitar token JWT: {data}")
            raise AuthUnexpectedError(provider='docusign', error_code=error)

        logger.info(f"Token DocuSign obtido (expira em {data.get('expires_in')}s)")
        return data['access_token']

    def fetch_account_id(self, access_token: str) -> str:
        """
        Busca a conta do usuário autenticado.

        Usa a conta padrão (is_default) ou, na falta dela, a primeira.
        """
        self.requester.set_api_key(access_token)
        data = self.requester.get('/oauth/userinfo')

        accounts = data.get('accounts') or []
        if not accounts:
            raise AuthUnexpectedError("Usuário DocuSign sem contas associadas", provider='docusign')

        account = next((a for a in accounts if a.get('is_default') in (True, 'true')), accounts[0])
        return account['account_id']
