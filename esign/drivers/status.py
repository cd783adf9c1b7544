"""
Tradução de status nativos dos providers para os status canônicos.

As tabelas são totais: um código desconhecido vira UNKNOWN, nunca um erro.
"""
from typing import Dict, Any
import logging

from esign.models import TransactionStatus, SignerStatus

logger = logging.getLogger(__name__)


# Status de envelope do DocuSign
DOCUSIGN_TRANSACTION_STATUS = {
    'created': TransactionStatus.DRAFT,        # envelope em rascunho
    'sent': TransactionStatus.READY,           # pronto para assinar
    'delivered': TransactionStatus.READY,      # destinatário abriu o documento
    'completed': TransactionStatus.COMPLETED,
    'declined': TransactionStatus.REFUSED,
    'voided': TransactionStatus.CANCELED,      # anulado pelo remetente
}

# Status de destinatário do DocuSign
DOCUSIGN_SIGNER_STATUS = {
    'created': SignerStatus.WAITING,           # só existe em envelopes rascunho
    'sent': SignerStatus.READY,
    'delivered': SignerStatus.ACCESSED,        # visualizou no site de assinatura
    'signed': SignerStatus.SIGNED,             # transitório, vai para completed
    'completed': SignerStatus.SIGNED,
    'declined': SignerStatus.CANCELED,
}


def translate_status(table: Dict[str, Any], code, default):
    """
    Busca um código na tabela do provider.

    Args:
        table: Mapa código nativo -> status canônico
        code: Código retornado pelo provider (pode ser None)
        default: Status usado quando o código não está na tabela

    Returns:
        Status canônico
    """
    if isinstance(code, str) and code in table:
        return table[code]

    logger.warning(f"Status de provider desconhecido: {code!r}, usando {default.value}")
    return default


def convert_transaction_status(code) -> TransactionStatus:
    """Converte status de envelope DocuSign em TransactionStatus"""
    return translate_status(DOCUSIGN_TRANSACTION_STATUS, code, TransactionStatus.UNKNOWN)


def convert_signer_status(code) -> SignerStatus:
    """Converte status de destinatário DocuSign em SignerStatus"""
    return translate_status(DOCUSIGN_SIGNER_STATUS, code, SignerStatus.UNKNOWN)
