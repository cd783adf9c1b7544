"""
Assinatura eletrônica com drivers intercambiáveis e modelo canônico.
"""
from esign.drivers import SignatureDriver, DocusignDriver, DriverFactory
from esign.exceptions import (
    SignatureError,
    ConfigValidationError,
    ScenarioValidationError,
    AuthConsentRequiredError,
    AuthUnexpectedError,
    UnimplementedError,
    ProviderRequestError,
)
from esign.models import (
    Scenario,
    Document,
    Signer,
    Signature,
    Transaction,
    TransactionStatus,
    SignerResult,
    SignerStatus,
    DocumentResult,
    Webhook,
)

__all__ = [
    'SignatureDriver',
    'DocusignDriver',
    'DriverFactory',
    'SignatureError',
    'ConfigValidationError',
    'ScenarioValidationError',
    'AuthConsentRequiredError',
    'AuthUnexpectedError',
    'UnimplementedError',
    'ProviderRequestError',
    'Scenario',
    'Document',
    'Signer',
    'Signature',
    'Transaction',
    'TransactionStatus',
    'SignerResult',
    'SignerStatus',
    'DocumentResult',
    'Webhook',
]
