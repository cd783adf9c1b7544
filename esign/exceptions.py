"""
Exceções customizadas para os drivers de assinatura.
"""


class SignatureError(Exception):
    """Erro genérico de assinatura eletrônica"""
    
    def __init__(self, message: str, provider: str = None):
        self.message = message
        self.provider = provider
        super().__init__(self.message)
    
    def __str__(self):
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class ConfigValidationError(SignatureError):
    """Parâmetro obrigatório de configuração ausente ou vazio"""
    
    def __init__(self, key: str, provider: str = None):
        self.key = key
        super().__init__(f'Parâmetro de configuração "{key}" deve ser informado', provider)


class ScenarioValidationError(SignatureError):
    """Cenário inconsistente (erro do chamador, não do provider)"""
    pass


class AuthConsentRequiredError(SignatureError):
    """
    O usuário impersonado ainda não deu consentimento à aplicação.
    
    A URL de consentimento deve ser apresentada a um humano; repetir a
    chamada não resolve.
    """
    
    def __init__(self, consent_url: str, provider: str = None):
        self.consent_url = consent_url
        super().__init__(f"Consentimento do usuário necessário: {consent_url}", provider)


class AuthUnexpectedError(SignatureError):
    """Falha inesperada ao obter o token de acesso"""
    
    def __init__(self, message: str = "Erro inesperado ao solicitar token JWT", provider: str = None, error_code: str = None):
        self.error_code = error_code
        if error_code:
            message = f"{message} ({error_code})"
        super().__init__(message, provider)


class UnimplementedError(SignatureError):
    """Operação não implementada para o provider"""
    
    def __init__(self, operation: str, provider: str = None):
        self.operation = operation
        super().__init__(f"{operation} ainda não está implementado", provider)


class ProviderRequestError(SignatureError):
    """Resposta de erro da API do provider"""
    
    def __init__(self, message: str, provider: str = None, status_code: int = None, response_body=None):
        self.status_code = status_code
        self.response_body = response_body
        # Preenchido quando o envelope já foi enviado antes da falha
        self.transaction_id = None
        super().__init__(message, provider)
