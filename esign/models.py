"""
Modelo de dados canônico, independente de provider.

O cliente monta um Scenario (documentos, signatários e posições de
assinatura) e o entrega a um driver. Os drivers devolvem Transaction,
SignerResult e DocumentResult reconstruídos a partir do estado do provider.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from esign.exceptions import ScenarioValidationError


class TransactionStatus(Enum):
    """Status canônico de uma transação"""
    DRAFT = 'draft'
    READY = 'ready'
    COMPLETED = 'completed'
    REFUSED = 'refused'
    CANCELED = 'canceled'
    EXPIRED = 'expired'
    UNKNOWN = 'unknown'


class SignerStatus(Enum):
    """Status canônico de um signatário"""
    WAITING = 'waiting'
    READY = 'ready'
    ACCESSED = 'accessed'
    SIGNED = 'signed'
    CANCELED = 'canceled'
    UNKNOWN = 'unknown'


def _isoformat(value):
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Document:
    """Documento a ser assinado"""
    id: str
    name: str
    filepath: Optional[str] = None
    content: Optional[bytes] = None

    def read_content(self) -> bytes:
        """Retorna os bytes do documento (conteúdo em memória ou arquivo)"""
        if self.content is not None:
            return self.content
        if not self.filepath:
            raise ScenarioValidationError(f"Documento '{self.id}' não possui conteúdo nem arquivo")
        with open(self.filepath, 'rb') as f:
            return f.read()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'filepath': self.filepath,
        }


@dataclass(frozen=True)
class Signer:
    """Signatário; o id é a chave de roteamento no provider"""
    id: str
    fullname: str
    email: str
    phone: Optional[str] = None
    birthday: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fullname': self.fullname,
            'email': self.email,
            'phone': self.phone,
            'birthday': _isoformat(self.birthday),
        }


@dataclass(frozen=True)
class Signature:
    """Posição de uma assinatura em um documento"""
    signer_id: str
    document_id: str
    page: int = 1
    x: int = 0
    y: int = 0
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'signer_id': self.signer_id,
            'document_id': self.document_id,
            'page': self.page,
            'x': self.x,
            'y': self.y,
            'label': self.label,
        }


@dataclass(frozen=True)
class Scenario:
    """
    Pedido de assinatura montado pelo cliente.

    Imutável após a construção: as listas recebidas são guardadas como tuplas.

    Exemplo:
        scenario = Scenario(
            documents=[Document(id='1', name='Contrato', filepath='/tmp/contrato.pdf')],
            signers=[Signer(id='1', fullname='Ana Souza', email='ana@example.com')],
            signatures=[Signature(signer_id='1', document_id='1', page=2, x=100, y=600)],
            title='Contrato de prestação de serviços',
            custom_id='pedido-42',
            status_url='https://app.example.com/webhooks/docusign',
        )
    """
    documents: Tuple[Document, ...] = ()
    signers: Tuple[Signer, ...] = ()
    signatures: Tuple[Signature, ...] = ()
    lang: str = 'en'
    title: Optional[str] = None
    custom_id: Optional[str] = None
    status_url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'documents', tuple(self.documents))
        object.__setattr__(self, 'signers', tuple(self.signers))
        object.__setattr__(self, 'signatures', tuple(self.signatures))

    def validate(self) -> None:
        """
        Verifica as invariantes do cenário.

        Raises:
            ScenarioValidationError: ids duplicados, assinatura apontando para
                signatário/documento inexistente ou página menor que 1
        """
        document_ids = [d.id for d in self.documents]
        signer_ids = [s.id for s in self.signers]

        if len(set(document_ids)) != len(document_ids):
            raise ScenarioValidationError("Ids de documento duplicados no cenário")
        if len(set(signer_ids)) != len(signer_ids):
            raise ScenarioValidationError("Ids de signatário duplicados no cenário")

        for signature in self.signatures:
            if signature.signer_id not in signer_ids:
                raise ScenarioValidationError(
                    f"Assinatura referencia signatário inexistente: {signature.signer_id}"
                )
            if signature.document_id not in document_ids:
                raise ScenarioValidationError(
                    f"Assinatura referencia documento inexistente: {signature.document_id}"
                )
            if signature.page < 1:
                raise ScenarioValidationError(
                    f"Página inválida ({signature.page}) para o documento {signature.document_id}"
                )

    def signatures_for(self, signer_id: str) -> List[Signature]:
        """Posições de assinatura de um signatário, na ordem do cenário"""
        return [s for s in self.signatures if s.signer_id == signer_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'documents': [d.to_dict() for d in self.documents],
            'signers': [s.to_dict() for s in self.signers],
            'signatures': [s.to_dict() for s in self.signatures],
            'lang': self.lang,
            'title': self.title,
            'custom_id': self.custom_id,
            'status_url': self.status_url,
        }


@dataclass
class SignerResult:
    """Estado de um signatário lido do provider"""
    id: str
    fullname: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: SignerStatus = SignerStatus.UNKNOWN
    # URL de assinatura de curta duração: usar imediatamente, nunca persistir
    url: Optional[str] = None
    action_at: Optional[datetime] = None
    error: Optional[str] = None
    birthday: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fullname': self.fullname,
            'email': self.email,
            'phone': self.phone,
            'status': self.status.value,
            'url': self.url,
            'action_at': _isoformat(self.action_at),
            'error': self.error,
            'birthday': _isoformat(self.birthday),
        }


@dataclass
class Transaction:
    """Transação de assinatura reconstruída a partir do provider"""
    id: str
    provider: str
    status: TransactionStatus = TransactionStatus.UNKNOWN
    signers: List[SignerResult] = field(default_factory=list)
    created_at: Optional[datetime] = None
    expire_at: Optional[datetime] = None
    title: Optional[str] = None
    custom_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'provider': self.provider,
            'status': self.status.value,
            'signers': [s.to_dict() for s in self.signers],
            'created_at': _isoformat(self.created_at),
            'expire_at': _isoformat(self.expire_at),
            'title': self.title,
            'custom_id': self.custom_id,
        }


@dataclass
class DocumentResult:
    """Documento baixado do provider"""
    name: str
    content: bytes
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'size': len(self.content) if self.content else 0,
            'metadata': self.metadata,
        }


@dataclass
class Webhook:
    """Callback do provider normalizado"""
    provider: str
    transaction_id: Optional[str]
    event: Optional[str]
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'provider': self.provider,
            'transaction_id': self.transaction_id,
            'event': self.event,
            'payload': self.payload,
        }
