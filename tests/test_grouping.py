from src.config import UNSPECIFIED_PROJECT
from src.data.grouping import group_by_project, project_summaries, sort_by_date_desc


def test_sort_newest_first_with_undated_last_and_stable(make_record):
    undated_a = make_record(topic="undated-a")
    old = make_record(when="2024-01-01", topic="old")
    undated_b = make_record(topic="undated-b")
    new = make_record(when="2024-03-01", topic="new")

    ordered = sort_by_date_desc([undated_a, old, undated_b, new])
    assert [r.topic for r in ordered] == ["new", "old", "undated-a", "undated-b"]


def test_equal_dates_keep_input_order(make_record):
    first = make_record(when="2024-02-01", topic="first")
    second = make_record(when="2024-02-01", topic="second")
    assert [r.topic for r in sort_by_date_desc([first, second])] == ["first", "second"]


def test_pre_epoch_dates_still_sort_before_undated(make_record):
    ancient = make_record(when="1960-05-01", topic="ancient")
    undated = make_record(topic="undated")
    assert [r.topic for r in sort_by_date_desc([undated, ancient])] == ["ancient", "undated"]


def test_group_by_project_partitions_and_sorts(make_record):
    records = [
        make_record(project="B", when="2024-01-01", topic="b1"),
        make_record(project="A", when="2024-01-05", topic="a1"),
        make_record(project="B", when="2024-02-01", topic="b2"),
        make_record(project=UNSPECIFIED_PROJECT, topic="loose"),
    ]
    groups = group_by_project(records)

    assert list(groups) == ["B", "A", UNSPECIFIED_PROJECT]
    assert [r.topic for r in groups["B"]] == ["b2", "b1"]
    assert [r.topic for r in groups[UNSPECIFIED_PROJECT]] == ["loose"]


def test_grouping_does_not_mutate_input(make_record):
    records = [make_record(when="2024-01-01", topic="a"), make_record(when="2024-02-01", topic="b")]
    group_by_project(records)
    sort_by_date_desc(records)
    assert [r.topic for r in records] == ["a", "b"]


def test_project_summaries(make_record):
    groups = group_by_project(
        [
            make_record(project="A", student="Zed", when="2024-01-01"),
            make_record(project="A", student="Amy", when="2024-03-01"),
            make_record(project="A", student="", when="2024-02-01"),
        ]
    )
    (summary,) = project_summaries(groups)
    assert summary.project == "A"
    assert summary.meetings == 3
    assert summary.latest_label == "2024-03-01"
    assert summary.students == ("Amy", "Zed")
