from src.config import DEFAULT_COLUMN_MAP, UNSPECIFIED_PROJECT
from src.data.frames import FRAME_COLUMNS, meetings_by, meetings_per_month, records_to_frame
from src.data.parser import parse_csv_text
from src.data.quality import summarize_load
from src.data.records import RecordNormalizer


def test_records_to_frame_flattens_lists(make_record):
    record = make_record(when="2024-01-05", subtopics=("Scope", "Timeline"), action_items=("Draft",))
    df = records_to_frame([record, make_record()])

    assert list(df.columns) == FRAME_COLUMNS
    assert df.loc[0, "subtopics"] == "Scope; Timeline"
    assert df.loc[0, "action_items"] == "Draft"
    assert df["date"].isna().tolist() == [False, True]


def test_records_to_frame_on_empty_input():
    df = records_to_frame([])
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_meetings_per_month_fills_gaps(make_record):
    records = [
        make_record(when="2024-01-03"),
        make_record(when="2024-01-20"),
        make_record(when="2024-03-11"),
        make_record(),
    ]
    monthly = meetings_per_month(records_to_frame(records))
    assert monthly["meetings"].tolist() == [2, 0, 1]
    assert [p.month for p in monthly["period"]] == [1, 2, 3]


def test_meetings_per_month_without_dates(make_record):
    assert meetings_per_month(records_to_frame([make_record()])).empty


def test_meetings_by_project(make_record):
    df = records_to_frame([make_record(project="B"), make_record(project="A"), make_record(project="B")])
    counts = meetings_by(df, "project")
    assert counts.to_dict(orient="records") == [
        {"project": "B", "meetings": 2},
        {"project": "A", "meetings": 1},
    ]


def test_summarize_load_reports_gaps():
    text = (
        "Timestamp,Date of Meeting,Meeting Topic,Action Items (for next week)\n"
        "9/18/2025 14:03:22,,Kickoff,Read papers\n"
        ",soon,Review,\n"
    )
    rows = parse_csv_text(text)
    records = RecordNormalizer(DEFAULT_COLUMN_MAP).normalize_all(rows)
    summary = summarize_load(rows, records, DEFAULT_COLUMN_MAP)

    assert summary["raw_row_count"] == 2
    assert summary["dated_records"] == 1
    assert summary["undated_records"] == 1
    assert summary["unparsed_date_labels"] == ["soon"]
    assert summary["unspecified_project_records"] == 2
    assert summary["action_column"] == "Action Items (for next week)"
    assert DEFAULT_COLUMN_MAP.project in summary["missing_columns"]
    assert "Meeting Topic" not in summary["missing_columns"]
    assert records[0].project == UNSPECIFIED_PROJECT


def test_summarize_load_with_nothing_loaded():
    summary = summarize_load([], [], DEFAULT_COLUMN_MAP)
    assert summary["raw_row_count"] == 0
    assert summary["missing_columns"] == []
    assert summary["action_column"] is None
