"""
Interface base para drivers de providers de assinatura eletrônica.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional
import logging

from esign.exceptions import ConfigValidationError
from esign.models import Scenario, Transaction, DocumentResult, Webhook

logger = logging.getLogger(__name__)


class SignatureDriver(ABC):
    """
    Interface base para drivers de providers de assinatura.
    Todos os providers devem implementar esta interface; o código cliente
    depende apenas dela.
    """

    provider_name: str = None

    # Chaves de configuração obrigatórias, validadas antes de qualquer chamada
    required_config_keys: List[str] = []

    @classmethod
    def validate_config(cls, config: Dict[str, Any]) -> None:
        """
        Raises:
            ConfigValidationError: Na primeira chave ausente ou vazia
        """
        for key in cls.required_config_keys:
            value = config.get(key) if config else None
            if value is None or value == '':
                raise ConfigValidationError(key, provider=cls.provider_name)

    @abstractmethod
    def get_name(self) -> str:
        """Retorna nome do provider ('docusign', ...)"""
        pass

    @abstractmethod
    def create_transaction(self, scenario: Scenario) -> Transaction:
        """
        Envia documentos e signatários ao provider.

        Args:
            scenario: Cenário montado pelo cliente

        Returns:
            Transaction: Estado da transação logo após o envio
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Transaction:
        """
        Lê o estado atual da transação no provider (sem cache).

        Args:
            transaction_id: ID da transação no provider
        """
        pass

    @abstractmethod
    def get_documents(self, transaction_id: str) -> List[DocumentResult]:
        """
        Baixa os documentos da transação, sem os certificados gerados
        pelo provider.
        """
        pass

    @abstractmethod
    def cancel_transaction(self, transaction_id: str) -> Transaction:
        """
        Cancela a transação.

        Raises:
            UnimplementedError: Se o provider não suporta a operação
        """
        pass

    @abstractmethod
    def format_webhook(self, payload: Dict[str, Any]) -> Webhook:
        """
        Normaliza um callback do provider.

        Raises:
            UnimplementedError: Se o provider não suporta a operação
        """
        pass

    @abstractmethod
    def get_expiration_days(self) -> int:
        """Duração padrão (em dias) da janela de assinatura"""
        pass

    def compute_expire_at(self, created_at: Optional[datetime]) -> Optional[datetime]:
        if created_at is None:
            return None
        return created_at + timedelta(days=self.get_expiration_days())
