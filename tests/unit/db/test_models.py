from datetime import datetime

from mrologix.db.models import (
    Attachment,
    FlightRecord,
    IncomingInspection,
    StockInventory,
    TechnicalQuery,
    TechnicalQueryResponse,
    TechnicalQueryTag,
    UserActivity,
)


def test_record_ids_are_generated(db_session):
    record = FlightRecord(date=datetime(2024, 1, 1))
    db_session.add(record)
    db_session.commit()
    assert isinstance(record.id, str) and len(record.id) == 32
    assert record.created_at is not None


def test_attachments_cascade_with_their_record(db_session):
    record = FlightRecord(id="fr-1", date=datetime(2024, 1, 1))
    record.attachments.append(Attachment(file_name="a.pdf", file_key="k/a.pdf", file_size=2**40))
    db_session.add(record)
    db_session.commit()
    assert db_session.query(Attachment).one().file_size == 2**40

    db_session.delete(record)
    db_session.commit()
    assert db_session.query(Attachment).count() == 0


def test_inspection_link_survives_stock_removal(db_session):
    item = StockInventory(id="st-1", incoming_date=datetime(2024, 1, 1))
    inspection = IncomingInspection(id="ii-1", inspection_date=datetime(2024, 1, 2), stock_inventory=item)
    db_session.add_all([item, inspection])
    db_session.commit()
    assert item.inspections == [inspection]

    db_session.delete(item)
    db_session.commit()
    db_session.refresh(inspection)
    assert inspection.stock_inventory_id is None


def test_activity_details_use_the_metadata_column(station_records):
    columns = {c.name for c in UserActivity.__table__.columns}
    assert "metadata" in columns
    assert "details" not in columns
    activity = station_records.get(UserActivity, 2)
    assert activity.details == {"source": "web"}


def test_technical_query_children_cascade(station_records):
    query = station_records.get(TechnicalQuery, "tq-1")
    assert query.tag_names == ["A-320", "ATA-21"]
    assert [r.id for r in query.responses][:2] == ["tqr-1", "tqr-2"]

    station_records.delete(query)
    station_records.commit()
    assert station_records.query(TechnicalQueryTag).filter_by(technical_query_id="tq-1").count() == 0
    assert station_records.query(TechnicalQueryResponse).count() == 0
