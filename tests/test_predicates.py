import pytest

from elastic_ransack.query import clauses
from elastic_ransack.query.predicates import PREDICATES, get, is_truthy, match


def test_match_returns_field_and_predicate():
    field, predicate = match("name_eq")
    assert field == "name"
    assert predicate.name == "eq"


def test_negated_predicate_wins_over_its_suffix():
    field, predicate = match("state_not_eq")
    assert field == "state"
    assert predicate.name == "not_eq"


def test_gteq_is_not_mistaken_for_gt():
    field, predicate = match("age_gteq")
    assert (field, predicate.name) == ("age", "gteq")


def test_not_null_is_not_mistaken_for_null():
    field, predicate = match("deleted_at_not_null")
    assert (field, predicate.name) == ("deleted_at", "not_null")


def test_key_without_suffix_does_not_match():
    assert match("name") is None
    assert match("eq") is None
    assert match("_eq") is None


def test_suffix_requires_underscore():
    # "join" ends with "in" but not with "_in"
    assert match("join") is None


def test_predicate_names_are_unique():
    names = [p.name for p in PREDICATES]
    assert len(names) == len(set(names))


def test_get_unknown_predicate_raises():
    assert get("lt").name == "lt"
    with pytest.raises(KeyError):
        get("between")


def test_eq_builds_term():
    assert get("eq").build("status", "open") == {"term": {"status": "open"}}


def test_not_eq_builds_negated_term():
    assert get("not_eq").build("status", "open") == {
        "bool": {"must_not": [{"term": {"status": "open"}}]}
    }


def test_in_splits_comma_separated_string():
    assert get("in").build("tag", "a, b,c") == {"terms": {"tag": ["a", "b", "c"]}}


def test_in_keeps_lists():
    assert get("in").build("id", [1, 2]) == {"terms": {"id": [1, 2]}}


def test_range_predicates():
    assert get("gt").build("age", 18) == {"range": {"age": {"gt": 18}}}
    assert get("gteq").build("age", 18) == {"range": {"age": {"gte": 18}}}
    assert get("lt").build("age", 18) == {"range": {"age": {"lt": 18}}}
    assert get("lteq").build("age", 18) == {"range": {"age": {"lte": 18}}}


def test_cont_builds_wildcard_or_phrase():
    assert get("cont").build("title", "hello world") == clauses.contains("title", "hello world")
    assert clauses.contains("title", "hello world") == {
        "bool": {
            "should": [
                {
                    "bool": {
                        "filter": [
                            {"wildcard": {"title": {"value": "*hello*"}}},
                            {"wildcard": {"title": {"value": "*world*"}}},
                        ]
                    }
                },
                {
                    "bool": {
                        "filter": [
                            {"match_phrase": {"title": "hello"}},
                            {"match_phrase": {"title": "world"}},
                        ]
                    }
                },
            ],
            "minimum_should_match": 1,
        }
    }


def test_start_and_end():
    assert get("start").build("name", "Jo") == {"prefix": {"name": "Jo"}}
    assert get("end").build("name", "son") == {"wildcard": {"name": {"value": "*son"}}}


def test_present_checks_existence():
    assert get("present").build("email", "1") == {"exists": {"field": "email"}}
    assert get("present").build("email", "0") == {
        "bool": {"must_not": [{"exists": {"field": "email"}}]}
    }


def test_null_is_inverse_of_present():
    assert get("null").build("email", True) == {
        "bool": {"must_not": [{"exists": {"field": "email"}}]}
    }
    assert get("null").build("email", "false") == {"exists": {"field": "email"}}


@pytest.mark.parametrize("value", ["1", "true", "T", "yes", 1, True])
def test_is_truthy(value):
    assert is_truthy(value)


@pytest.mark.parametrize("value", ["0", "false", "", "no", 0, False])
def test_is_not_truthy(value):
    assert not is_truthy(value)


def test_wildcard_escape():
    assert clauses.wildcard_escape("x?z") == "x\\?z"
    assert clauses.wildcard_escape("a*b\\c") == "a\\*b\\\\c"
    assert clauses.wildcard_escape("plain") == "plain"


def test_cont_escapes_wildcard_operators():
    clause = get("cont").build("name", "x?z 50*")
    wildcards = clause["bool"]["should"][0]["bool"]["filter"]
    assert wildcards == [
        {"wildcard": {"name": {"value": "*x\\?z*"}}},
        {"wildcard": {"name": {"value": "*50\\**"}}},
    ]
    phrases = clause["bool"]["should"][1]["bool"]["filter"]
    assert phrases[0] == {"match_phrase": {"name": "x?z"}}


def test_end_escapes_wildcard_operators():
    assert get("end").build("name", "a?") == {"wildcard": {"name": {"value": "*a\\?"}}}
