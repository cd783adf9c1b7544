"""
Testes do RestApiRequester
"""
from unittest.mock import Mock, patch

import pytest

from esign.exceptions import ProviderRequestError
from esign.utils.requester import RestApiRequester


def make_response(json_data=None, status_code=200, content=b''):
    response = Mock(status_code=status_code, ok=200 <= status_code < 300, url='', content=content, text='')
    if json_data is None:
        response.json.side_effect = ValueError('No JSON')
    else:
        response.json.return_value = json_data
    return response


class TestRestApiRequester:
    """Testes do cliente HTTP"""

    @patch('esign.utils.requester.requests.request')
    def test_get_json(self, mock_request):
        mock_request.return_value = make_response({'ok': True})
        requester = RestApiRequester('https://api.example.com/v2/', api_key='token', timeout=5)

        assert requester.get('/items', params={'page': 1}) == {'ok': True}
        mock_request.assert_called_once_with(
            'GET',
            'https://api.example.com/v2/items',
            headers={'Accept': 'application/json', 'Authorization': 'Bearer token'},
            timeout=5,
            params={'page': 1},
        )

    @patch('esign.utils.requester.requests.request')
    def test_timeout_override(self, mock_request):
        """Timeout por chamada substitui o padrão"""
        mock_request.return_value = make_response({})
        requester = RestApiRequester('https://api.example.com', timeout=30)

        requester.post('/items', {'a': 1}, timeout=2)

        assert mock_request.call_args.kwargs['timeout'] == 2
        assert mock_request.call_args.kwargs['json'] == {'a': 1}
        assert 'Authorization' not in mock_request.call_args.kwargs['headers']

    @patch('esign.utils.requester.requests.request')
    def test_error_status_raises(self, mock_request):
        mock_request.return_value = make_response({'errorCode': 'ENVELOPE_DOES_NOT_EXIST'}, status_code=404)
        requester = RestApiRequester('https://api.example.com', provider='docusign')

        with pytest.raises(ProviderRequestError) as exc_info:
            requester.get('/envelopes/x')

        assert exc_info.value.status_code == 404
        assert exc_info.value.response_body == {'errorCode': 'ENVELOPE_DOES_NOT_EXIST'}
        assert str(exc_info.value).startswith('[docusign]')

    @patch('esign.utils.requester.requests.request')
    def test_get_bytes(self, mock_request):
        mock_request.return_value = make_response(content=b'%PDF')
        requester = RestApiRequester('https://api.example.com')

        assert requester.get_bytes('/documents/1') == b'%PDF'
        assert mock_request.call_args.kwargs['headers']['Accept'] == 'application/pdf'

    @patch('esign.utils.requester.requests.request')
    def test_post_form_keeps_error_body(self, mock_request):
        """Erros OAuth voltam como JSON, não como exceção"""
        mock_request.return_value = make_response({'error': 'consent_required'}, status_code=400)
        requester = RestApiRequester('https://account-d.docusign.com')

        assert requester.post_form('/oauth/token', {'grant_type': 'x'}) == {'error': 'consent_required'}
        assert mock_request.call_args.kwargs['data'] == {'grant_type': 'x'}

    @patch('esign.utils.requester.requests.request')
    def test_post_form_invalid_body(self, mock_request):
        mock_request.return_value = make_response(status_code=502)
        requester = RestApiRequester('https://account-d.docusign.com')

        with pytest.raises(ProviderRequestError) as exc_info:
            requester.post_form('/oauth/token', {})

        assert exc_info.value.status_code == 502
