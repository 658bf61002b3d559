import pytest

from marejada.api import server
from marejada.risk_model.aggregation import MarineDataError


@pytest.fixture
def fetch_calls(monkeypatch, make_hourly):
    calls = []
    hourly = make_hourly(swell_height=2.0, swell_direction=300.0, swell_period=16.0)

    def fake_fetch():
        calls.append(1)
        return hourly

    monkeypatch.setattr(server.marine, 'fetch_marine_forecast', fake_fetch)
    server.forecast_cache.clear()
    yield calls
    server.forecast_cache.clear()


@pytest.fixture
def client():
    return server.app.test_client()


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_root_lists_endpoints(client):
    body = client.get('/').get_json()
    assert body['endpoints']['forecast'] == '/forecast'


def test_forecast_payload(client, fetch_calls):
    response = client.get('/forecast')
    assert response.status_code == 200

    body = response.get_json()
    assert set(body) == {'timestamp', 'moon', 'current', 'overall_risk', 'beaches',
                         'timeline_48h', 'daily_summary'}
    assert body['moon']['tidal_effect'] in ('SPRING', 'NEAP', 'NORMAL')
    assert body['current']['swell_direction_label'] == 'NW'
    assert body['beaches'][0]['name'] == 'Los Muertos'
    assert body['beaches'][0]['exposure_nw'] == 'MUY ALTA'
    assert body['overall_risk']['level'] in ('BAJO', 'MODERADO', 'ALTO', 'CRÍTICO')
    assert len(body['daily_summary']) == 7
    assert response.headers['Access-Control-Allow-Origin'] == '*'
    assert response.cache_control.max_age is not None


def test_forecast_is_cached(client, fetch_calls):
    client.get('/forecast')
    client.get('/forecast')
    client.get('/beaches')
    assert len(fetch_calls) == 1

    client.get('/forecast?refresh=1')
    assert len(fetch_calls) == 2


def test_upstream_failure_returns_502(client, monkeypatch):
    def failing_fetch():
        raise MarineDataError('Open-Meteo error: 503 Server Error')

    monkeypatch.setattr(server.marine, 'fetch_marine_forecast', failing_fetch)
    server.forecast_cache.clear()

    response = client.get('/forecast')
    assert response.status_code == 502
    body = response.get_json()
    assert body['error'] == 'Error al obtener pronóstico'
    assert '503' in body['details']


def test_malformed_timestamps_return_502(client, monkeypatch, make_hourly):
    hourly = make_hourly(n_hours=48)
    hourly['time'][5] = 'not-a-date'
    monkeypatch.setattr(server.marine, 'fetch_marine_forecast', lambda: hourly)
    server.forecast_cache.clear()

    response = client.get('/forecast')
    assert response.status_code == 502
    body = response.get_json()
    assert body['error'] == 'Error al obtener pronóstico'
    assert "'time' values" in body['details']
    server.forecast_cache.clear()


def test_beaches_sorted_by_risk(client, fetch_calls):
    body = client.get('/beaches').get_json()
    scores = [b['risk']['score'] for b in body['beaches']]
    assert scores == sorted(scores, reverse=True)
    assert body['swell_direction_label'] == 'NW'
    assert all('exposure_notes' in b for b in body['beaches'])


def test_single_beach_by_folded_name(client, fetch_calls):
    response = client.get('/beaches/malecon')
    assert response.status_code == 200
    body = response.get_json()
    assert body['beach']['name'] == 'Malecón'
    assert 'nw' in body['beach']['exposure_notes']
    assert len(body['daily']) == 7


def test_unknown_beach_is_404(client, fetch_calls):
    response = client.get('/beaches/Yelapa')
    assert response.status_code == 404
    assert fetch_calls == []


def test_unknown_route_is_json_404(client):
    response = client.get('/nope')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Not found'
