import json
from datetime import UTC, datetime, timedelta

from mrologix.assistant import adapters
from mrologix.assistant.sanitize import sanitize_arguments
from mrologix.assistant.serialization import safe_dumps


def _call(db, name, **arguments):
    args = sanitize_arguments(name, json.dumps(arguments))
    return getattr(adapters, name)(db, args)


def _ids(rows):
    return [row["id"] for row in rows]


def test_search_temperature_control_text_and_dates(station_records):
    assert _ids(_call(station_records, "search_temperature_control")) == ["tc-2", "tc-1", "tc-3"]
    assert _ids(_call(station_records, "search_temperature_control", location="stores")) == ["tc-1", "tc-3"]
    assert _ids(_call(station_records, "search_temperature_control", employeeName="ROE")) == ["tc-2"]
    rows = _call(station_records, "search_temperature_control", dateFrom="2024-06-01", dateTo="2024-06-01")
    assert _ids(rows) == ["tc-1"]


def test_search_temperature_control_numeric_bounds(station_records):
    assert _ids(_call(station_records, "search_temperature_control", tempMin=20)) == ["tc-2", "tc-1"]
    assert _ids(_call(station_records, "search_temperature_control", tempMax=21.5)) == ["tc-1", "tc-3"]
    assert _ids(_call(station_records, "search_temperature_control", humidityMin=40, humidityMax=60)) == ["tc-1"]
    # non-numeric bounds are ignored
    assert len(_call(station_records, "search_temperature_control", tempMin="hot")) == 3


def test_list_recent_temperature_control(station_records):
    assert _ids(_call(station_records, "list_recent_temperature_control", limit=2)) == ["tc-2", "tc-1"]
    payload = json.loads(safe_dumps(_call(station_records, "list_recent_temperature_control")))
    assert payload[0]["comment"] == "AC unit down"
    assert "comment" not in payload[1]
    assert payload[1]["temperature"] == 21.5


def test_search_technician_training(station_records):
    assert _ids(_call(station_records, "search_technician_training")) == ["tt-2", "tt-1"]
    assert _ids(_call(station_records, "search_technician_training", technician="jane")) == ["tt-1"]
    assert _ids(_call(station_records, "search_technician_training", engineType="cfm")) == ["tt-1"]
    assert _ids(_call(station_records, "search_technician_training", hasEngine=False)) == ["tt-2"]
    assert _ids(_call(station_records, "search_technician_training", hasHours=True, type="rating")) == ["tt-1"]


def test_get_technician_training_by_id(station_records):
    training = _call(station_records, "get_technician_training_by_id", id="tt-1")
    assert training["engineType"] == "CFM56"
    assert training["hours"] == 16.0
    assert training["attachments"] == [
        {"id": "att-tt-1", "fileName": "certificate.pdf", "fileType": "application/pdf", "fileSize": 1024}
    ]
    assert "technician-training/" not in json.dumps(training, default=str)

    payload = json.loads(safe_dumps(_call(station_records, "get_technician_training_by_id", id="tt-2")))
    assert "engineType" not in payload
    assert "hours" not in payload
    assert _call(station_records, "get_technician_training_by_id", id="nope") is None


def test_search_sms_reports(station_records):
    assert _ids(_call(station_records, "search_sms_reports")) == ["sms-1", "sms-2"]
    assert _ids(_call(station_records, "search_sms_reports", priority="high")) == ["sms-1"]
    assert _call(station_records, "search_sms_reports", priority="hi") == []
    assert _ids(_call(station_records, "search_sms_reports", status="Closed")) == ["sms-2"]
    assert _ids(_call(station_records, "search_sms_reports", submitter="roe")) == ["sms-2"]
    assert _ids(_call(station_records, "search_sms_reports", reportType="haz")) == ["sms-1"]


def test_search_sms_reports_description_matches_title_or_body(station_records):
    assert _ids(_call(station_records, "search_sms_reports", description="bolt")) == ["sms-1"]
    assert _ids(_call(station_records, "search_sms_reports", description="FATIGUE")) == ["sms-2"]


def test_search_sms_reports_created_range(station_records):
    since = (datetime.now(UTC) - timedelta(days=10)).date().isoformat()
    assert _ids(_call(station_records, "search_sms_reports", dateFrom=since)) == ["sms-1"]


def test_search_airport_id_text_filters(station_records):
    assert _ids(_call(station_records, "search_airport_id")) == ["ap-3", "ap-2", "ap-1"]
    assert _ids(_call(station_records, "search_airport_id", station="sta-2")) == ["ap-3", "ap-2"]
    assert _ids(_call(station_records, "search_airport_id", badgeIdNumber="3003")) == ["ap-3"]
    assert _ids(_call(station_records, "search_airport_id", dateTo="2022-12-31")) == ["ap-1"]


def test_search_airport_id_expiry(station_records):
    assert _ids(_call(station_records, "search_airport_id", isExpired=True)) == ["ap-1"]
    assert _ids(_call(station_records, "search_airport_id", isExpired=False)) == ["ap-3", "ap-2"]
    assert _ids(_call(station_records, "search_airport_id", expiringWithinDays=30)) == ["ap-2"]
    # the expiry window wins over the expired flag
    assert _ids(_call(station_records, "search_airport_id", expiringWithinDays=30, isExpired=True)) == ["ap-2"]
    # clamped to one day
    assert _call(station_records, "search_airport_id", expiringWithinDays=-5) == []


def test_search_technical_queries_filters(station_records):
    assert _ids(_call(station_records, "search_technical_queries")) == ["tq-1", "tq-2"]
    assert _ids(_call(station_records, "search_technical_queries", title="PACK")) == ["tq-1"]
    assert _ids(_call(station_records, "search_technical_queries", status="OPEN")) == ["tq-1"]
    assert _call(station_records, "search_technical_queries", status="open") == []
    assert _ids(_call(station_records, "search_technical_queries", isResolved=True)) == ["tq-2"]
    assert _ids(_call(station_records, "search_technical_queries", tags="ATA-21")) == ["tq-1"]
    assert _call(station_records, "search_technical_queries", tags="ata-21") == []


def test_search_technical_queries_by_creator(station_records):
    assert _ids(_call(station_records, "search_technical_queries", createdBy="roe")) == ["tq-2"]
    assert _ids(_call(station_records, "search_technical_queries", createdBy="jdoe")) == ["tq-1"]
    assert _ids(_call(station_records, "search_technical_queries", createdBy="JANE")) == ["tq-1"]


def test_search_technical_queries_previews_responses(station_records):
    query = _call(station_records, "search_technical_queries", tags="A-320")[0]
    assert query["tags"] == ["A-320", "ATA-21"]
    assert query["createdBy"] == {"firstName": "Jane", "lastName": "Doe", "username": "jdoe"}
    assert _ids(query["responses"]) == ["tqr-1", "tqr-2", "tqr-3", "tqr-4", "tqr-5"]
    assert query["responses"][0]["createdBy"]["username"] == "jroe"
    assert "votes" not in query


def test_get_technical_query_by_id(station_records):
    query = _call(station_records, "get_technical_query_by_id", id="tq-1")
    assert len(query["responses"]) == 6
    assert query["responses"][0]["attachments"] == []
    assert query["votes"] == [{"userId": 2, "voteType": "UP"}]
    assert query["updatedBy"] is None
    assert query["resolvedBy"] is None

    resolved = _call(station_records, "get_technical_query_by_id", id="tq-2")
    assert resolved["isResolved"] is True
    assert resolved["resolvedBy"]["username"] == "jdoe"
    assert _call(station_records, "get_technical_query_by_id", id="tq-9") is None


def test_search_user_activity(station_records):
    assert _ids(_call(station_records, "search_user_activity")) == [1, 2, 3]
    assert _ids(_call(station_records, "search_user_activity", userId="1")) == [1, 2]
    assert _ids(_call(station_records, "search_user_activity", action="LOGIN")) == [1, 3]
    assert _call(station_records, "search_user_activity", action="login") == []
    assert _ids(_call(station_records, "search_user_activity", resourceType="TechnicalQuery")) == [2]


def test_search_user_activity_non_numeric_user_matches_nobody(station_records):
    assert _call(station_records, "search_user_activity", userId="jdoe") == []
    assert _call(station_records, "search_user_activity", userId="-1") == []
    assert _call(station_records, "search_user_activity", userId="9" * 40) == []


def test_user_activity_projection_hides_client_details(station_records):
    row = _call(station_records, "search_user_activity", resourceType="TechnicalQuery")[0]
    assert row["user"] == {"firstName": "Jane", "lastName": "Doe", "username": "jdoe"}
    assert row["metadata"] == {"source": "web"}
    text = json.dumps(_call(station_records, "search_user_activity"), default=str)
    assert "10.0.0.5" not in text
    assert "Mozilla" not in text


def test_dashboard_statistics_for_station_modules(station_records):
    stats = _call(
        station_records,
        "get_dashboard_statistics",
        modules=[
            "temperature_control",
            "technician_training",
            "sms_reports",
            "technical_queries",
            "airport_id",
            "user_activity",
        ],
    )
    assert stats == {
        "temperature_control": {"total": 3, "recentCount": 1},
        "technician_training": {"total": 2, "withEngine": 1, "withHours": 1},
        "sms_reports": {"total": 2, "recentCount": 1},
        "technical_queries": {"total": 2, "resolved": 1, "open": 1},
        "airport_id": {"total": 3, "expired": 1, "expiringSoon": 1},
        "user_activity": {"total": 3, "recentCount": 1},
    }
