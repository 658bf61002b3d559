import pytest
import requests

from marejada.data_sources import marine
from marejada.risk_model.aggregation import MarineDataError


class StubResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


@pytest.fixture
def stub_get(monkeypatch):
    calls = []

    def install(response):
        def fake_get(url, params=None, timeout=None):
            calls.append({'url': url, 'params': params, 'timeout': timeout})
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(marine.requests, 'get', fake_get)
        return calls

    return install


def test_fetch_returns_hourly_block(stub_get, make_hourly):
    hourly = make_hourly(n_hours=24)
    calls = stub_get(StubResponse({'latitude': 20.7, 'hourly': hourly}))

    result = marine.fetch_marine_forecast()

    assert result == hourly
    assert len(calls) == 1
    params = calls[0]['params']
    assert params['timezone'] == 'America/Mexico_City'
    assert params['forecast_days'] == 7
    assert 'swell_wave_height' in params['hourly'].split(',')
    assert 'secondary_swell_wave_period' in params['hourly'].split(',')
    assert calls[0]['timeout'] > 0


def test_http_error_raises(stub_get):
    stub_get(StubResponse(status_code=503))
    with pytest.raises(MarineDataError, match='Open-Meteo error'):
        marine.fetch_marine_forecast()


def test_connection_error_raises(stub_get):
    stub_get(requests.ConnectionError('connection refused'))
    with pytest.raises(MarineDataError):
        marine.fetch_marine_forecast()


def test_invalid_json_raises(stub_get):
    stub_get(StubResponse(json_error=requests.JSONDecodeError('Expecting value', '', 0)))
    with pytest.raises(MarineDataError, match='invalid response'):
        marine.fetch_marine_forecast()


def test_html_body_raises_invalid_response(stub_get):
    html = requests.Response()
    html.status_code = 200
    html._content = b'<html>oops</html>'
    html.encoding = 'utf-8'
    stub_get(html)
    with pytest.raises(MarineDataError, match='invalid response'):
        marine.fetch_marine_forecast()


def test_missing_hourly_raises_with_reason(stub_get):
    stub_get(StubResponse({'error': True, 'reason': 'Latitude must be in range'}))
    with pytest.raises(MarineDataError, match='Latitude must be in range'):
        marine.fetch_marine_forecast()


def test_empty_hourly_raises(stub_get):
    stub_get(StubResponse({'hourly': {'time': [], 'wave_height': []}}))
    with pytest.raises(MarineDataError):
        marine.fetch_marine_forecast()
