from placesearch_client.coordinator import InputCoordinator

from conftest import FakeLookup, make_place

ROMA = make_place("Roma", 1)


def _coordinator(clock, lookup, **kw):
    return InputCoordinator(lookup, clock, limit=10, debounce_ms=300,
                            min_length=2, blur_grace_ms=200, **kw)


def test_burst_of_keystrokes_issues_one_request(clock):
    lookup = FakeLookup({"rom": [ROMA]})
    c = _coordinator(clock, lookup)

    c.on_input("r"); clock.advance(80)
    c.on_input("ro"); clock.advance(90)
    c.on_input("rom")
    clock.advance(299)
    assert clock.jobs == []

    clock.advance(1)
    assert len(clock.jobs) == 1
    clock.run_job()
    assert lookup.calls == [("rom", 10)]
    assert c.state.places == [ROMA]


def test_input_has_no_immediate_network_effect(clock):
    lookup = FakeLookup()
    c = _coordinator(clock, lookup)
    c.on_input("roma")
    assert clock.jobs == [] and lookup.calls == []
    assert c.state.term == "roma"


def test_repeated_debounced_term_is_not_redispatched(clock):
    lookup = FakeLookup({"rom": [ROMA]})
    c = _coordinator(clock, lookup)

    c.on_input("rom"); clock.advance(300); clock.run_job()
    c.on_input("ro"); clock.advance(100)
    c.on_input("rom"); clock.advance(300)
    assert clock.jobs == []
    assert lookup.calls == [("rom", 10)]


def test_short_terms_never_reach_the_network(clock):
    lookup = FakeLookup({"rom": [ROMA]})
    c = _coordinator(clock, lookup)

    c.on_input("rom"); clock.advance(300); clock.run_job()
    assert c.state.show_dropdown is True

    c.on_input(" r  "); clock.advance(300)
    assert clock.jobs == []
    assert c.state.places == [] and c.state.show_dropdown is False


def test_short_term_supersedes_in_flight_request(clock):
    lookup = FakeLookup({"rom": [ROMA]})
    c = _coordinator(clock, lookup)

    c.on_input("rom"); clock.advance(300)
    c.on_input("r"); clock.advance(300)
    clock.run_job()                      # late answer for "rom"
    assert c.state.places == []
    assert c.state.is_loading is False


def test_loading_flag_tracks_request(clock):
    c = _coordinator(clock, FakeLookup({"bari": [make_place("Bari", 2)]}))
    c.on_input("bari"); clock.advance(300)
    assert c.state.is_loading is True
    clock.run_job()
    assert c.state.is_loading is False
