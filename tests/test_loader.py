import io

import httpx
import pytest

from src.data.loader import (
    cache_busted_url,
    fetch_csv_text,
    load_rows_from_upload,
    load_rows_from_url,
)
from src.data.parser import CsvFetchError, CsvParseError


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_cache_busted_url_appends_timestamp():
    assert cache_busted_url("https://x.test/pub?output=csv", now=1.5) == "https://x.test/pub?output=csv&t=1500"
    assert cache_busted_url("https://x.test/data.csv", now=2) == "https://x.test/data.csv?t=2000"


def test_fetch_sends_no_cache_request(sample_csv):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["cache_control"] = request.headers.get("cache-control")
        return httpx.Response(200, text=sample_csv)

    with _client(handler) as client:
        text = fetch_csv_text("https://sheets.test/pub?output=csv", client=client)

    assert text == sample_csv
    assert seen["params"]["output"] == "csv"
    assert seen["params"]["t"].isdigit()
    assert seen["cache_control"] == "no-cache"


def test_non_2xx_status_is_a_fetch_error():
    with _client(lambda request: httpx.Response(404, text="gone")) as client:
        with pytest.raises(CsvFetchError, match="HTTP 404"):
            fetch_csv_text("https://sheets.test/missing.csv", client=client)


def test_transport_error_is_a_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(CsvFetchError, match="connection refused"):
            fetch_csv_text("https://sheets.test/pub.csv", client=client)


def test_blank_url_is_rejected_without_a_request():
    with pytest.raises(CsvFetchError, match="Please enter a CSV URL"):
        fetch_csv_text("   ")


def test_load_rows_from_url_parses_payload(sample_csv):
    with _client(lambda request: httpx.Response(200, text=sample_csv)) as client:
        rows = load_rows_from_url("https://sheets.test/pub.csv", client=client)
    assert [r["Meeting Topic"] for r in rows] == ["Kickoff", "Review"]


def test_load_rows_from_url_surfaces_parse_errors():
    with _client(lambda request: httpx.Response(200, text='A,B\n"1,2\n')) as client:
        with pytest.raises(CsvParseError):
            load_rows_from_url("https://sheets.test/pub.csv", client=client)


def test_upload_accepts_bytes_with_bom():
    rows = load_rows_from_upload("\ufeffTopic,Agenda\nKickoff,Scope\n".encode("utf-8"))
    assert rows == [{"Topic": "Kickoff", "Agenda": "Scope"}]


def test_upload_accepts_file_like_objects(sample_csv):
    rows = load_rows_from_upload(io.BytesIO(sample_csv.encode("utf-8")), name="meetings.csv")
    assert len(rows) == 2


def test_upload_rejects_non_utf8_bytes():
    with pytest.raises(CsvParseError, match="not UTF-8"):
        load_rows_from_upload(b"\xff\xfeT\x00", name="latin.csv")
