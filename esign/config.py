import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # DocuSign
    DOCUSIGN_MODE = os.getenv('DOCUSIGN_MODE', 'test')  # 'production' ou 'test'
    DOCUSIGN_INTEGRATOR_KEY = os.getenv('DOCUSIGN_INTEGRATOR_KEY', '')
    # Usuário impersonado na conta DocuSign
    DOCUSIGN_USER_ID = os.getenv('DOCUSIGN_USER_ID', '')
    # Chave privada RSA associada à integrator key
    # Opção 1: chave inline (quebras de linha como \n)
    DOCUSIGN_PRIVATE_KEY = os.getenv('DOCUSIGN_PRIVATE_KEY', '')
    # Opção 2: caminho para arquivo PEM
    DOCUSIGN_PRIVATE_KEY_PATH = os.getenv('DOCUSIGN_PRIVATE_KEY_PATH', '')
    DOCUSIGN_REDIRECT_URI = os.getenv('DOCUSIGN_REDIRECT_URI', '')
    # Rota da aplicação que redireciona o signatário para a página de assinatura
    DOCUSIGN_SIGNATURE_URL = os.getenv('DOCUSIGN_SIGNATURE_URL', '')
    DOCUSIGN_EXPIRATION_DAYS = int(os.getenv('DOCUSIGN_EXPIRATION_DAYS', '14'))

    # HTTP
    ESIGN_HTTP_TIMEOUT = float(os.getenv('ESIGN_HTTP_TIMEOUT', '30'))  # segundos

    @classmethod
    def docusign_config(cls) -> dict:
        """Monta a configuração do DocusignDriver a partir das variáveis de ambiente"""
        private_key = cls.DOCUSIGN_PRIVATE_KEY.replace('\\n', '\n')
        if not private_key and cls.DOCUSIGN_PRIVATE_KEY_PATH:
            with open(cls.DOCUSIGN_PRIVATE_KEY_PATH, 'r') as f:
                private_key = f.read()

        return {
            'mode': cls.DOCUSIGN_MODE,
            'integrator_key': cls.DOCUSIGN_INTEGRATOR_KEY,
            'user_id': cls.DOCUSIGN_USER_ID,
            'private_key': private_key,
            'redirect_uri': cls.DOCUSIGN_REDIRECT_URI,
            'signature_url': cls.DOCUSIGN_SIGNATURE_URL,
            'expiration_days': cls.DOCUSIGN_EXPIRATION_DAYS,
            'timeout': cls.ESIGN_HTTP_TIMEOUT,
        }

    @classmethod
    def for_provider(cls, provider: str) -> dict:
        """Retorna a configuração do provider informado"""
        if provider == 'docusign':
            return cls.docusign_config()
        raise ValueError(f"Sem configuração de ambiente para o provider '{provider}'")
