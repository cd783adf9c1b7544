"""
Parsing de datas retornadas pelos providers.
"""
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser


def parse_datetime(value) -> Optional[datetime]:
    """
    Converte timestamp do provider em datetime.

    Aceita ISO 8601 com frações longas (ex: '2024-05-02T01:34:56.1230000Z'),
    que datetime.fromisoformat não trata em todas as versões.

    Returns:
        datetime ou None se o valor estiver vazio
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return date_parser.isoparse(value)


def parse_date(value) -> Optional[date]:
    """Converte 'YYYY-MM-DD' (ou timestamp) em date; vazio vira None"""
    if not value:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_datetime(value).date()
