from paris_app.airquality import aqi_level, fetch_air_quality
from paris_app.constants import AIR_QUALITY_API, PARIS_CENTER, QUARTIER_COORDS


def test_aqi_bands():
    assert aqi_level(10).label == "Excellent"
    assert aqi_level(40).label == "Bon"
    assert aqi_level(55).label == "Modéré"
    assert aqi_level(150).label == "Très mauvais"


def test_reading_uses_quartier_coordinates(fake_http):
    fake_http.routes[AIR_QUALITY_API] = {
        "current": {"time": "2025-01-01T12:00", "european_aqi": 32, "pm10": 14.5, "pm2_5": None}
    }
    reading = fetch_air_quality("q1")
    assert reading.european_aqi == 32
    assert reading.pm2_5 == 0.0
    assert reading.time == "2025-01-01T12:00"
    params = fake_http.calls[-1][1]
    assert (params["latitude"], params["longitude"]) == QUARTIER_COORDS["q1"]


def test_unknown_quartier_uses_city_centre(fake_http):
    fake_http.routes[AIR_QUALITY_API] = {"current": {"european_aqi": 10}}
    fetch_air_quality("q999")
    params = fake_http.calls[-1][1]
    assert (params["latitude"], params["longitude"]) == PARIS_CENTER


def test_failures_return_none(fake_http):
    assert fetch_air_quality("q1") is None
    fake_http.routes[AIR_QUALITY_API] = {"hourly": {}}
    assert fetch_air_quality("q2") is None
    assert fetch_air_quality(None) is None
