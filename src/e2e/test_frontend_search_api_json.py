import pytest
from placesearch import Engine
from placesearch_web.web import app as flask_app


@pytest.fixture
def client(seed_file: str):
    eng = Engine(); eng.build(sources=[seed_file], db_dsn="memory://")

    import placesearch_web.web as webmod
    webmod._engine = eng
    yield flask_app.test_client()
    webmod._engine = None
    eng.shutdown()


@pytest.mark.e2e
def test_search_returns_wire_shaped_places(client):
    rv = client.get("/search?name=rom&limit=3")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["query"] == "rom"
    assert data["count"] == len(data["results"]) == 2
    first = data["results"][0]
    assert first == {"name": "Roma", "isoCode": "IT-RM", "belfioreCode": "H501",
                     "cityId": 58091, "district": "Roma", "region": "Lazio"}


@pytest.mark.e2e
def test_missing_name_is_a_hint_not_an_error(client):
    rv = client.get("/search")
    assert rv.status_code == 200
    data = rv.get_json()
    assert "message" in data and "example" in data
    assert "results" not in data


@pytest.mark.e2e
@pytest.mark.parametrize("raw", ["abc", "", "-4", "2.5"])
def test_bad_limit_falls_back_to_default(client, raw):
    rv = client.get(f"/search?name=r&limit={raw}")
    assert rv.status_code == 200
    assert rv.get_json()["count"] <= 10


@pytest.mark.e2e
def test_limit_is_applied(client):
    data = client.get("/search?name=rom&limit=1").get_json()
    assert [r["name"] for r in data["results"]] == ["Roma"]
    assert client.get("/search?name=rom&limit=0").get_json()["count"] == 0


@pytest.mark.e2e
def test_listing_endpoint(client):
    data = client.get("/all?limit=2").get_json()
    assert data["count"] == 2
    assert [r["cityId"] for r in data["results"]] == [58091, 3129]
    assert client.get("/all").get_json()["count"] == 5


@pytest.mark.e2e
def test_health(client):
    data = client.get("/health").get_json()
    assert data == {"ok": True, "count": 5}


@pytest.mark.e2e
def test_oversized_limit_on_sqlite_store_lists_everything(tmp_path, seed_file: str):
    eng = Engine(); eng.build(sources=[seed_file], db_dsn=f"sqlite:///{tmp_path / 'p.sqlite'}")

    import placesearch_web.web as webmod
    webmod._engine = eng
    try:
        client = flask_app.test_client()
        rv = client.get("/all?limit=99999999999999999999")
        assert rv.status_code == 200
        assert rv.get_json()["count"] == 5
        rv = client.get("/search?name=rom&limit=99999999999999999999")
        assert rv.status_code == 200
        assert rv.get_json()["count"] == 2
    finally:
        webmod._engine = None
        eng.shutdown()
