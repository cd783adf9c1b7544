"""
Driver para integração com DocuSign (REST API v2, envelopes JSON).

O DocuSign não fornece uma URL de assinatura permanente por signatário: ele
cria "recipient views" de curta duração. A aplicação deve expor uma rota
(signature_url) que chama get_signing_url() e redireciona o signatário.
"""
from typing import Dict, Any, List, Optional
import base64
import logging
import re

from esign.config import Config
from esign.drivers.base import SignatureDriver
from esign.drivers.status import convert_transaction_status, convert_signer_status
from esign.exceptions import UnimplementedError, ProviderRequestError
from esign.models import (
    Scenario,
    Transaction,
    SignerResult,
    SignerStatus,
    DocumentResult,
    Webhook,
)
from esign.utils.dates import parse_datetime, parse_date
from esign.utils.docusign_auth import DocusignAuth
from esign.utils.requester import RestApiRequester

logger = logging.getLogger(__name__)

PRODUCTION_ENDPOINT = 'https://www.docusign.net/restapi/v2'
PRODUCTION_AUTH_ENDPOINT = 'https://account.docusign.com'
DEMO_ENDPOINT = 'https://demo.docusign.net/restapi/v2'
DEMO_AUTH_ENDPOINT = 'https://account-d.docusign.com'

DEFAULT_EXPIRATION_DAYS = 14

# Valor especial: signatário embedded que também recebe o email do DocuSign
SIGN_AT_DOCUSIGN = 'SIGN_AT_DOCUSIGN'

# O certificado de conclusão aparece na lista de documentos do envelope
CERTIFICATE_MARKER = 'certificate'

# Só signatários cuja vez chegou podem abrir uma recipient view; os demais
# recebem RECIPIENT_NOT_IN_SEQUENCE ou já concluíram
_ACTIVE_SIGNER_STATUSES = (SignerStatus.READY, SignerStatus.ACCESSED)


def _snake_case(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


class DocusignDriver(SignatureDriver):
    """Driver para DocuSign"""

    provider_name = 'docusign'

    required_config_keys = [
        'mode',
        # API key criada no painel de administração
        'integrator_key',
        # Usuário impersonado na conta DocuSign
        'user_id',
        # Chave privada associada à integrator key
        'private_key',
        # Redirect URI associada à integrator key
        'redirect_uri',
        # Rota da aplicação que redireciona o signatário para o DocuSign
        'signature_url',
    ]

    def __init__(self, config: Dict[str, Any]):
        """
        Valida a configuração e autentica no DocuSign.

        Args:
            config: Configuração do driver (ver required_config_keys; opcionais:
                'timeout', 'expiration_days', 'email_subject')

        Raises:
            ConfigValidationError: Chave obrigatória ausente ou vazia
            AuthConsentRequiredError: Usuário precisa conceder consentimento
            AuthUnexpectedError: Falha na obtenção do token
        """
        self.validate_config(config)
        self.config = config

        if config['mode'] == 'production':
            self.endpoint = PRODUCTION_ENDPOINT
            self.auth_endpoint = PRODUCTION_AUTH_ENDPOINT
        else:
            self.endpoint = DEMO_ENDPOINT
            self.auth_endpoint = DEMO_AUTH_ENDPOINT

        self.signature_url = config['signature_url'].rstrip('/')
        self.expiration_days = int(config.get('expiration_days') or DEFAULT_EXPIRATION_DAYS)

        # Cliente HTTP exclusivo da instância: guarda o token deste driver
        requester = RestApiRequester(
            self.auth_endpoint,
            timeout=config.get('timeout') or Config.ESIGN_HTTP_TIMEOUT,
            provider=self.provider_name
        )

        auth = DocusignAuth(
            requester,
            integrator_key=config['integrator_key'],
            user_id=config['user_id'],
            private_key=config['private_key'],
            redirect_uri=config['redirect_uri'],
        )
        # Token e conta são definidos uma única vez e nunca reescritos
        self._access_token = auth.request_access_token()
        self._account_id = auth.fetch_account_id(self._access_token)

        requester.set_endpoint(self.endpoint)
        self.requester = requester

        logger.info(f"DocusignDriver autenticado na conta {self._account_id} ({config['mode']})")

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def account_id(self) -> str:
        return self._account_id

    def get_name(self) -> str:
        return self.provider_name

    def get_expiration_days(self) -> int:
        return self.expiration_days

    def _envelope_path(self, transaction_id: str) -> str:
        return f"/accounts/{self._account_id}/envelopes/{transaction_id}"

    # -------------------------------------------------------------------------
    # Envelope
    # -------------------------------------------------------------------------

    def build_envelope(self, scenario: Scenario) -> Dict[str, Any]:
        """
        Monta a definição de envelope a partir do cenário.

        Um destinatário por signatário, cada um com as posições de assinatura
        que lhe pertencem; um documento por documento do cenário.
        """
        signers = []
        for sc_signer in scenario.signers:
            signer_id = str(sc_signer.id)
            sign_here_tabs = [
                {
                    'xPosition': signature.x,
                    'yPosition': signature.y,
                    'pageNumber': signature.page,
                    'recipientId': str(signature.signer_id),
                    'documentId': str(signature.document_id),
                    'tabLabel': signature.label,
                }
                for signature in scenario.signatures_for(sc_signer.id)
            ]

            signers.append({
                'recipientId': signer_id,
                'routingOrder': signer_id,
                'email': sc_signer.email,
                'name': sc_signer.fullname,
                # Sem código de acesso por email
                'accessCode': '',
                'addAccessCodeToEmail': False,
                # Devolvido em todas as leituras do envelope
                'customFields': [
                    sc_signer.birthday.strftime('%Y-%m-%d') if sc_signer.birthday else '',
                ],
                'emailNotification': {
                    'emailBody': '',
                    'emailSubject': '',
                    'supportedLanguage': scenario.lang,
                },
                # clientUserId torna o destinatário "embedded" (sem email),
                # a não ser que embeddedRecipientStartURL seja SIGN_AT_DOCUSIGN
                'clientUserId': signer_id,
                'embeddedRecipientStartURL': SIGN_AT_DOCUSIGN,
                'signInEachLocation': False,
                'signerEmail': sc_signer.email,
                'signerName': sc_signer.fullname,
                'tabs': {
                    'signHereTabs': sign_here_tabs,
                },
            })

        documents = [
            {
                'documentId': str(sc_document.id),
                'name': sc_document.name,
                'documentBase64': base64.b64encode(sc_document.read_content()).decode('utf-8'),
                'fileExtension': 'PDF',
            }
            for sc_document in scenario.documents
        ]

        return {
            'recipients': {
                'signers': signers,
            },
            'documents': documents,
            'eventNotification': {
                'url': scenario.status_url,
                'includeTimezone': True,
            },
            'emailSubject': self.config.get('email_subject') or scenario.title or 'Documento para assinatura',
            'change_routing_order': False,
            # 'sent' envia imediatamente, sem passar por rascunho
            'status': 'sent',
            'customFields': {
                'textCustomFields': [
                    {
                        'fieldId': 'title',
                        'name': 'title',
                        'value': scenario.title,
                    },
                    {
                        'fieldId': 'customId',
                        'name': 'customId',
                        'value': scenario.custom_id,
                    },
                ],
            },
            'expirations': {
                'expireEnabled': True,
                'expireAfter': self.get_expiration_days(),
                # 0 = nenhum email de aviso antes da expiração
                'expireWarn': 0,
            },
        }

    def create_transaction(self, scenario: Scenario) -> Transaction:
        """Cria e envia o envelope; o retorno vem de get_transaction"""
        scenario.validate()
        envelope = self.build_envelope(scenario)

        data = self.requester.post(f"/accounts/{self._account_id}/envelopes", envelope)
        envelope_id = data.get('envelopeId')
        if not envelope_id:
            raise ProviderRequestError("Resposta de criação de envelope sem envelopeId", provider=self.provider_name, response_body=data)

        logger.info(
            f"Envelope DocuSign {envelope_id} criado: {len(scenario.signers)} signatário(s), "
            f"{len(scenario.documents)} documento(s)"
        )
        try:
            return self.get_transaction(envelope_id)
        except ProviderRequestError as e:
            logger.error(f"Envelope {envelope_id} enviado, mas a leitura falhou: {e}")
            e.transaction_id = envelope_id
            raise

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Lê envelope, destinatários, campos customizados e documentos"""
        path = self._envelope_path(transaction_id)
        envelope = self.requester.get(path)
        recipients = self.requester.get(f"{path}/recipients")
        custom_fields = self.requester.get(f"{path}/custom_fields")
        documents = self.requester.get(f"{path}/documents")

        logger.debug(
            f"Envelope {transaction_id}: status={envelope.get('status')}, "
            f"{len(documents.get('envelopeDocuments') or [])} documento(s)"
        )

        signers = [
            self._build_signer_result(transaction_id, recipient)
            for recipient in recipients.get('signers') or []
        ]

        created_at = parse_datetime(envelope.get('createdDateTime'))
        transaction = Transaction(
            id=envelope.get('envelopeId') or transaction_id,
            provider=self.get_name(),
            status=convert_transaction_status(envelope.get('status')),
            signers=signers,
            created_at=created_at,
            expire_at=self.compute_expire_at(created_at),
        )

        for custom_field in custom_fields.get('textCustomFields') or []:
            if custom_field.get('name') == 'title':
                transaction.title = custom_field.get('value')
            elif custom_field.get('name') == 'customId':
                transaction.custom_id = custom_field.get('value')

        return transaction

    def _build_signer_result(self, transaction_id: str, recipient: Dict[str, Any]) -> SignerResult:
        status = convert_signer_status(recipient.get('status'))

        signer = SignerResult(
            id=recipient.get('recipientId'),
            fullname=recipient.get('name'),
            email=recipient.get('email'),
            status=status,
            error=recipient.get('declinedReason'),
        )

        action_at = (
            recipient.get('signedDateTime')
            or recipient.get('declinedDateTime')
            or recipient.get('deliveredDateTime')
        )
        signer.action_at = parse_datetime(action_at)

        custom_fields = recipient.get('customFields') or []
        if custom_fields and custom_fields[0]:
            # Destinatários criados fora deste driver podem ter outro conteúdo
            try:
                signer.birthday = parse_date(custom_fields[0])
            except (ValueError, OverflowError):
                logger.warning(f"Campo de data inválido no destinatário {signer.id}: {custom_fields[0]!r}")

        # A URL expira rapidamente: gerada a cada leitura, usar com redirect
        if status in _ACTIVE_SIGNER_STATUSES:
            signer.url = self._create_recipient_view(transaction_id, recipient)

        return signer

    def _create_recipient_view(self, transaction_id: str, recipient: Dict[str, Any]) -> Optional[str]:
        data = self.requester.post(f"{self._envelope_path(transaction_id)}/views/recipient", {
            'returnUrl': self.signature_url,
            'authenticationMethod': 'none',
            'email': recipient.get('email'),
            'userName': recipient.get('name'),
            'recipientId': recipient.get('recipientId'),
            'clientUserId': recipient.get('clientUserId'),
        })
        return data.get('url')

    def get_signing_url(self, transaction_id: str, signer_id: str) -> Optional[str]:
        """
        Gera uma nova URL de assinatura para o signatário.

        A URL é de uso único e curta duração; deve ser usada imediatamente
        (redirect) e nunca armazenada.
        """
        recipients = self.requester.get(f"{self._envelope_path(transaction_id)}/recipients")
        for recipient in recipients.get('signers') or []:
            if str(recipient.get('recipientId')) == str(signer_id):
                return self._create_recipient_view(transaction_id, recipient)
        return None

    # -------------------------------------------------------------------------
    # Documentos
    # -------------------------------------------------------------------------

    def get_documents(self, transaction_id: str) -> List[DocumentResult]:
        """Baixa os documentos do envelope, ignorando o certificado de conclusão"""
        path = self._envelope_path(transaction_id)
        data = self.requester.get(f"{path}/documents")

        files = []
        for document in data.get('envelopeDocuments') or []:
            document_id = str(document.get('documentId', ''))
            if CERTIFICATE_MARKER in document_id:
                continue

            content = self.requester.get_bytes(f"{path}/documents/{document_id}")
            files.append(DocumentResult(
                name=document.get('name'),
                content=content,
                metadata={_snake_case(key): value for key, value in document.items()},
            ))

        return files

    # -------------------------------------------------------------------------
    # Não implementados
    # -------------------------------------------------------------------------

    def cancel_transaction(self, transaction_id: str) -> Transaction:
        raise UnimplementedError('cancel_transaction', provider=self.provider_name)

    def format_webhook(self, payload: Dict[str, Any]) -> Webhook:
        raise UnimplementedError('format_webhook', provider=self.provider_name)
