"""
Drivers de providers de assinatura eletrônica.
"""
from .base import SignatureDriver
from .docusign import DocusignDriver
from .factory import DriverFactory

__all__ = [
    'SignatureDriver',
    'DocusignDriver',
    'DriverFactory'
]
