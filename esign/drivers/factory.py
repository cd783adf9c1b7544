"""
Factory para criar drivers de providers de assinatura.
"""
from typing import Dict, Any, Optional, Type
import logging

from esign.config import Config
from .base import SignatureDriver
from .docusign import DocusignDriver

logger = logging.getLogger(__name__)


class DriverFactory:
    """Registro de drivers de assinatura, indexado pelo nome do provider"""
    
    _drivers: Dict[str, Type[SignatureDriver]] = {
        'docusign': DocusignDriver,
    }
    
    @classmethod
    def get_driver(
        cls,
        provider: str,
        config: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> SignatureDriver:
        """
        Cria driver para o provider especificado.
        
        Args:
            provider: Nome do provider ('docusign')
            config: Configuração do driver; se omitida, lida do ambiente (Config)
            **kwargs: Repassados ao construtor do driver
            
        Returns:
            SignatureDriver: Driver do provider
            
        Raises:
            ValueError: Se provider não é suportado
        """
        provider = provider.lower()
        
        if provider not in cls._drivers:
            raise ValueError(
                f"Provider '{provider}' não é suportado. "
                f"Providers disponíveis: {', '.join(cls._drivers.keys())}"
            )
        
        driver_class = cls._drivers[provider]
        if config is None:
            config = Config.for_provider(provider)
        
        try:
            return driver_class(config, **kwargs)
        except Exception as e:
            logger.error(f"Erro ao criar driver {provider}: {str(e)}")
            raise
    
    @classmethod
    def register(cls, provider: str, driver_class: Type[SignatureDriver]) -> None:
        """Registra um driver adicional"""
        if not (isinstance(driver_class, type) and issubclass(driver_class, SignatureDriver)):
            raise TypeError(f"{driver_class!r} não implementa SignatureDriver")
        cls._drivers[provider.lower()] = driver_class
    
    @classmethod
    def list_providers(cls) -> list[str]:
        """Retorna lista de providers suportados"""
        return list(cls._drivers.keys())
    
    @classmethod
    def is_provider_supported(cls, provider: str) -> bool:
        """Verifica se provider é suportado"""
        return provider.lower() in cls._drivers
