from datetime import date, datetime

from src.config import ALL_OPTION
from src.data.filters import (
    DEFAULT_FILTERS,
    MeetingFilters,
    apply_filters,
    distinct_options,
    is_default,
    serialize_filters,
)


def test_student_filter_conjunction(make_record):
    p1 = make_record(project="P1", student="X", when="2024-01-01")
    p2 = make_record(project="P2", student="Y", when="2024-02-01")

    result = apply_filters([p1, p2], MeetingFilters(project=ALL_OPTION, student="X"))
    assert result == [p1]


def test_project_and_student_must_both_match(make_record):
    a = make_record(project="P1", student="X")
    b = make_record(project="P1", student="Y")
    c = make_record(project="P2", student="X")
    assert apply_filters([a, b, c], MeetingFilters(project="P1", student="X")) == [a]


def test_default_filters_keep_everything_sorted(make_record):
    undated = make_record(topic="undated")
    old = make_record(when="2024-01-01", topic="old")
    new = make_record(when="2024-06-01", topic="new")
    result = apply_filters([undated, old, new], DEFAULT_FILTERS)
    assert [r.topic for r in result] == ["new", "old", "undated"]


def test_undated_records_survive_any_date_bounds(make_record):
    undated = make_record(topic="undated")
    dated = [make_record(when="2024-01-01"), make_record(when="2024-12-31")]
    filters = MeetingFilters(date_from=date(2030, 1, 1), date_to=date(2020, 1, 1))
    assert apply_filters(dated + [undated], filters) == [undated]


def test_date_bounds_are_inclusive_calendar_days(make_record):
    morning = make_record(when="2024-03-01T09:00:00", topic="on-start")
    evening = make_record(when="2024-03-31T18:45:00", topic="on-end")
    before = make_record(when="2024-02-29T23:59:00", topic="before")
    after = make_record(when="2024-04-01T00:00:00", topic="after")

    filters = MeetingFilters(date_from=date(2024, 3, 1), date_to=date(2024, 3, 31))
    result = apply_filters([morning, evening, before, after], filters)
    assert [r.topic for r in result] == ["on-end", "on-start"]


def test_datetime_bounds_are_accepted(make_record):
    record = make_record(when="2024-03-01T09:00:00")
    filters = MeetingFilters(date_from=datetime(2024, 3, 1, 12, 0))
    assert apply_filters([record], filters) == [record]


def test_query_matches_case_insensitively_across_fields(make_record):
    by_inputs = make_record(topic="Review", my_inputs="Consider a Bayesian model")
    by_agenda = make_record(topic="Kickoff", subtopics=("Scope", "Literature survey"))
    by_student = make_record(student="Dana Scully", topic="Intro")
    other = make_record(topic="Budget")
    records = [by_inputs, by_agenda, by_student, other]

    assert apply_filters(records, MeetingFilters(query="  bayesian ")) == [by_inputs]
    assert apply_filters(records, MeetingFilters(query="LITERATURE")) == [by_agenda]
    assert apply_filters(records, MeetingFilters(query="scully")) == [by_student]
    assert len(apply_filters(records, MeetingFilters(query=""))) == 4


def test_query_does_not_search_action_items_or_link(make_record):
    record = make_record(action_items=("Email ethics board",), link="https://ethics.example")
    assert apply_filters([record], MeetingFilters(query="ethics")) == []


def test_distinct_options_are_sorted_with_wildcard(make_record):
    records = [
        make_record(project="Zeta", student="bob"),
        make_record(project="Alpha", student=""),
        make_record(project="Zeta", student="Amy"),
    ]
    projects, students = distinct_options(records)
    assert projects == [ALL_OPTION, "Alpha", "Zeta"]
    assert students == [ALL_OPTION, "Amy", "bob"]


def test_distinct_options_on_empty_set():
    assert distinct_options([]) == ([ALL_OPTION], [ALL_OPTION])


def test_serialize_and_default_detection():
    filters = MeetingFilters(project="P1", date_from=date(2024, 1, 2), query="x")
    assert serialize_filters(filters) == {
        "project": "P1",
        "student": ALL_OPTION,
        "date_from": "2024-01-02",
        "date_to": None,
        "query": "x",
    }
    assert not is_default(filters)
    assert is_default(MeetingFilters())
