import pytest
import requests

from placesearch_client.lookup import LookupClient, LookupFailed

ROMA_WIRE = {"name": "Roma", "isoCode": "IT-RM", "belfioreCode": "H501",
             "cityId": 58091, "district": "Roma", "region": "Lazio"}


class FakeResponse:
    def __init__(self, status=200, payload=None, bad_json=False):
        self.status_code = status
        self._payload = payload
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.exc:
            raise self.exc
        return self.response

    def close(self):
        pass


def test_search_builds_query_and_parses_places():
    session = FakeSession(FakeResponse(payload={"query": "rom", "count": 1, "results": [ROMA_WIRE]}))
    client = LookupClient("http://svc:8000/", timeout=2.5, session=session)

    places = client.search("rom", 7)
    assert [p.name for p in places] == ["Roma"]
    assert places[0].id == 58091 and places[0].regional_code == "H501"
    assert session.calls == [("http://svc:8000/search", {"name": "rom", "limit": 7}, 2.5)]


def test_list_all_uses_listing_endpoint():
    session = FakeSession(FakeResponse(payload={"count": 1, "results": [ROMA_WIRE]}))
    client = LookupClient("http://svc", session=session)
    assert len(client.list_all(50)) == 1
    assert session.calls[0][0] == "http://svc/all"


@pytest.mark.parametrize("session", [
    FakeSession(exc=requests.Timeout("read timed out")),
    FakeSession(exc=requests.ConnectionError("refused")),
    FakeSession(FakeResponse(status=503, payload={"error": "down"})),
    FakeSession(FakeResponse(bad_json=True)),
    FakeSession(FakeResponse(payload={"message": "Please provide a name query parameter"})),
    FakeSession(FakeResponse(payload={"results": [{"name": "Roma"}]})),
])
def test_failures_raise_lookup_failed(session):
    with pytest.raises(LookupFailed):
        LookupClient("http://svc", session=session).search("roma", 10)
