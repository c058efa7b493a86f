import pytest

from placesearch.ranking import levenshtein


def test_empty_string_distance_is_other_length():
    assert levenshtein("", "") == 0
    assert levenshtein("", "roma") == 4
    assert levenshtein("napoli", "") == 6


def test_identical_strings_have_zero_distance():
    assert levenshtein("firenze", "firenze") == 0


def test_kitten_sitting():
    assert levenshtein("kitten", "sitting") == 3


@pytest.mark.parametrize("a,b,d", [
    ("rpma", "roma", 1),       # substitution
    ("rma", "roma", 1),        # insertion
    ("romma", "roma", 1),      # deletion
    ("flaw", "lawn", 2),
    ("milano", "milan", 1),
    ("abc", "xyz", 3),
])
def test_known_distances_are_symmetric(a, b, d):
    assert levenshtein(a, b) == d
    assert levenshtein(b, a) == d
