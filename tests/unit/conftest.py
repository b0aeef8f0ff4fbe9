from datetime import UTC, datetime, timedelta

import pytest

from mrologix.db.connect import make_session_factory
from mrologix.db.models import (
    AirportID,
    Attachment,
    AuthUser,
    FlightRecord,
    IncomingInspection,
    SDRReport,
    SMSReport,
    StockInventory,
    TechnicalQuery,
    TechnicalQueryResponse,
    TechnicalQueryTag,
    TechnicalQueryVote,
    TechnicianTraining,
    TemperatureControl,
    UserActivity,
    UserRole,
    initialize_db,
    sqlite_engine,
)


@pytest.fixture(scope="function")
def db_session(tmp_path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = sqlite_engine(db_url)
    initialize_db(engine)
    get_test_session = make_session_factory(engine)
    with get_test_session() as session:
        yield session


@pytest.fixture
def fleet_records(db_session):
    """A small, fixed data set across every record kind."""

    flights = [
        FlightRecord(
            id="fr-1",
            date=datetime(2024, 5, 1, 8, 30),
            airline="Airline-1",
            fleet="A-320",
            flight_number="AB123",
            station="STA-1",
            service="Transit",
            tail="N123AB",
            has_time=True,
            block_time="01:45",
            out_time="07:10",
            has_defect=True,
            log_page_no="LP-100",
            discrepancy_note="Hydraulic LEAK found at left main gear",
            rectification_note="Replaced seal and leak checked",
            system_affected="ATA-29 Hydraulic Power",
            technician="Jane Doe",
            has_part_replaced=True,
            has_attachments=True,
            created_at=datetime(2024, 5, 1, 9, 0),
            updated_at=datetime(2024, 5, 2, 9, 0),
        ),
        FlightRecord(
            id="fr-2",
            date=datetime(2024, 5, 3, 23, 15),
            airline="Airline-1",
            fleet="A-320",
            flight_number="AB456",
            station="STA-2",
            service="Over-Night",
            tail="n123ab",
            has_time=False,
            has_defect=False,
            log_page_no="LP-101",
            system_affected="ATA-21 Air Conditioning",
            technician="John Roe",
            created_at=datetime(2024, 5, 3, 23, 30),
            updated_at=datetime(2024, 5, 3, 23, 30),
        ),
        FlightRecord(
            id="fr-3",
            date=datetime(2024, 4, 20, 12, 0),
            airline="Airline-2",
            fleet="B-737",
            flight_number="CD789",
            station="STA-1",
            service="Transit",
            tail="N999CD",
            has_time=True,
            block_time="02:10",
            out_time="11:00",
            has_defect=True,
            log_page_no="LP-050",
            discrepancy_note="Cabin pack inoperative",
            system_affected="ATA-21 Air Conditioning",
            technician="Jane Doe",
            created_at=datetime(2024, 4, 20, 12, 30),
            updated_at=datetime(2024, 4, 20, 12, 30),
        ),
    ]
    db_session.add_all(flights)
    db_session.add(
        Attachment(
            id="att-1",
            file_name="gear.jpg",
            file_type="image/jpeg",
            file_size=2048,
            file_key="flight-records/fr-1/gear.jpg",
            flight_record_id="fr-1",
            created_at=datetime(2024, 5, 1, 9, 5),
        )
    )

    stock = [
        StockInventory(
            id="st-1",
            incoming_date=datetime(2024, 3, 1),
            station="STA-1",
            owner="Airline-1",
            description="Hydraulic pump",
            part_no="HP-100",
            serial_no="SN-1",
            quantity=1,
            has_expire_date=True,
            expire_date=datetime(2020, 1, 1),
            type="Rotable",
            location="Shelf A",
            has_inspection=True,
            inspection_result="Passed",
            technician="Jane Doe",
            created_at=datetime(2024, 3, 1, 10, 0),
            updated_at=datetime(2024, 3, 1, 10, 0),
        ),
        StockInventory(
            id="st-2",
            incoming_date=datetime(2024, 3, 5),
            station="STA-2",
            owner="Airline-2",
            description="O-ring kit",
            part_no="OR-7",
            serial_no="SN-2",
            quantity=50,
            has_expire_date=True,
            expire_date=datetime(2099, 1, 1),
            type="Consumable",
            location="Bin 4",
            has_inspection=False,
            technician="John Roe",
            created_at=datetime(2024, 3, 5, 10, 0),
            updated_at=datetime(2024, 3, 5, 10, 0),
        ),
        StockInventory(
            id="st-3",
            incoming_date=datetime(2024, 3, 9),
            station="STA-1",
            owner="Airline-1",
            description="Cabin filter",
            part_no="CF-2",
            serial_no="SN-3",
            quantity=4,
            has_expire_date=False,
            type="Consumable",
            location="Bin 9",
            has_inspection=False,
            created_at=datetime(2024, 3, 9, 10, 0),
            updated_at=datetime(2024, 3, 9, 10, 0),
        ),
    ]
    db_session.add_all(stock)
    db_session.add(
        IncomingInspection(
            id="ii-1",
            inspection_date=datetime(2024, 3, 2, 14, 0),
            inspector="Mark Inspector",
            part_no="HP-100",
            serial_no="SN-1",
            description="Hydraulic pump",
            product_match="YES",
            product_specs="YES",
            physical_condition="NO",
            stock_inventory_id="st-1",
            created_at=datetime(2024, 3, 2, 14, 0),
            updated_at=datetime(2024, 3, 2, 14, 0),
        )
    )
    db_session.add_all(
        [
            SDRReport(
                id="sdr-1",
                control_number="SDR-2024-001",
                report_title="Gear actuator leak",
                difficulty_date=datetime(2024, 5, 1, 18, 0),
                submitter="jdoe",
                submitter_name="Jane Doe",
                station="STA-1",
                condition="Leaking",
                flight_number="AB123",
                airplane_model="A-320",
                airplane_tail_number="N123AB",
                part_number="ACT-5",
                serial_number="SN-77",
                ata_system_code="32",
                problem_description="Actuator seal leaking during taxi",
                created_at=datetime(2024, 5, 1, 19, 0),
                updated_at=datetime(2024, 5, 1, 19, 0),
            ),
            SDRReport(
                id="sdr-2",
                control_number="SDR-2024-002",
                report_title="Pack trip",
                difficulty_date=datetime(2024, 4, 20, 10, 0),
                submitter="jroe",
                submitter_name="John Roe",
                station="STA-2",
                condition="Inoperative",
                airplane_model="B-737",
                airplane_tail_number="N999CD",
                ata_system_code="21",
                problem_description="Pack tripped offline in cruise",
                created_at=datetime(2024, 4, 20, 11, 0),
                updated_at=datetime(2024, 4, 20, 11, 0),
            ),
        ]
    )
    db_session.commit()
    return db_session


@pytest.fixture
def station_records(db_session):
    """Compliance, technical query and activity rows; expiry and recency are relative to now."""

    now = datetime.now(UTC).replace(tzinfo=None)
    jane = AuthUser(
        id=1,
        username="jdoe",
        first_name="Jane",
        last_name="Doe",
        password_hash="x",
        password_salt="y",
        password_iterations=1,
        role=UserRole.editor,
    )
    john = AuthUser(
        id=2,
        username="jroe",
        first_name="John",
        last_name="Roe",
        password_hash="x",
        password_salt="y",
        password_iterations=1,
        role=UserRole.admin,
    )
    db_session.add_all([jane, john])
    db_session.flush()

    db_session.add_all(
        [
            TemperatureControl(
                id="tc-1",
                date=datetime(2024, 6, 1, 8, 0),
                time="08:00",
                location="Stores STA-1",
                temperature=21.5,
                humidity=40.0,
                employee_name="Jane Doe",
                created_at=now - timedelta(days=2),
            ),
            TemperatureControl(
                id="tc-2",
                date=datetime(2024, 6, 2, 8, 0),
                time="08:00",
                location="Hangar STA-2",
                temperature=29.0,
                humidity=65.5,
                employee_name="John Roe",
                has_comment=True,
                comment="AC unit down",
                created_at=now - timedelta(days=30),
            ),
            TemperatureControl(
                id="tc-3",
                date=datetime(2024, 5, 20, 8, 0),
                location="Stores STA-1",
                temperature=18.0,
                humidity=35.0,
                employee_name="Jane Doe",
                created_at=now - timedelta(days=40),
            ),
        ]
    )
    db_session.add_all(
        [
            TechnicianTraining(
                id="tt-1",
                date=datetime(2024, 2, 10),
                technician="Jane Doe",
                organization="OEM Academy",
                type="Type Rating",
                training="A320 B1 differences",
                has_engine=True,
                engine_type="CFM56",
                has_hours=True,
                hours=16.0,
                has_attachments=True,
            ),
            TechnicianTraining(
                id="tt-2",
                date=datetime(2024, 3, 15),
                technician="John Roe",
                organization="In-house",
                type="Recurrent",
                training="Human factors",
            ),
        ]
    )
    db_session.add(
        Attachment(
            id="att-tt-1",
            file_name="certificate.pdf",
            file_type="application/pdf",
            file_size=1024,
            file_key="technician-training/tt-1/certificate.pdf",
            technician_training_id="tt-1",
        )
    )
    db_session.add_all(
        [
            SMSReport(
                id="sms-1",
                report_number="SMS-001",
                report_title="Ramp FOD",
                report_description="Loose bolt found near stand 4",
                report_type="Hazard",
                priority="HIGH",
                status="OPEN",
                reporter_name="Jane Doe",
                created_at=now - timedelta(days=3),
            ),
            SMSReport(
                id="sms-2",
                report_number="SMS-002",
                report_title="Fatigue",
                report_description="Extended shift during AOG",
                report_type="Occurrence",
                priority="LOW",
                status="CLOSED",
                reporter_name="John Roe",
                created_at=now - timedelta(days=90),
            ),
        ]
    )
    db_session.add_all(
        [
            AirportID(
                id="ap-1",
                employee_name="Jane Doe",
                station="STA-1",
                badge_id_number="B-1001",
                id_issued_date=datetime(2022, 1, 10),
                expire_date=now - timedelta(days=10),
            ),
            AirportID(
                id="ap-2",
                employee_name="John Roe",
                station="STA-2",
                badge_id_number="B-2002",
                id_issued_date=datetime(2023, 6, 1),
                expire_date=now + timedelta(days=15),
            ),
            AirportID(
                id="ap-3",
                employee_name="Jane Doe",
                station="STA-2",
                badge_id_number="B-3003",
                id_issued_date=datetime(2024, 1, 5),
                expire_date=now + timedelta(days=400),
            ),
        ]
    )

    query = TechnicalQuery(
        id="tq-1",
        title="Recurring pack trip on A-320",
        description="Pack 1 trips offline in cruise after 2 hours",
        category="Air Conditioning",
        priority="HIGH",
        status="OPEN",
        created_by_id=1,
        created_at=datetime(2024, 5, 10, 9, 0),
    )
    query.tags = [TechnicalQueryTag(tag="ATA-21"), TechnicalQueryTag(tag="A-320")]
    query.responses = [
        TechnicalQueryResponse(
            id=f"tqr-{n}",
            content=f"Answer {n}",
            created_by_id=2,
            created_at=datetime(2024, 5, 10, 10 + n, 0),
        )
        for n in range(1, 7)
    ]
    query.votes = [TechnicalQueryVote(user_id=2, vote_type="UP")]
    resolved = TechnicalQuery(
        id="tq-2",
        title="Torque value for wheel nut",
        description="Which AMM task applies?",
        category="Landing Gear",
        priority="LOW",
        status="RESOLVED",
        is_resolved=True,
        created_by_id=2,
        resolved_by_id=1,
        resolved_at=datetime(2024, 4, 2, 12, 0),
        created_at=datetime(2024, 4, 1, 9, 0),
    )
    resolved.tags = [TechnicalQueryTag(tag="ATA-32")]
    db_session.add_all([query, resolved])

    db_session.add_all(
        [
            UserActivity(
                id=1,
                user_id=1,
                action="LOGIN",
                ip_address="10.0.0.5",
                user_agent="Mozilla/5.0",
                created_at=now - timedelta(hours=2),
            ),
            UserActivity(
                id=2,
                user_id=1,
                action="CREATE",
                resource_type="TechnicalQuery",
                resource_id="tq-1",
                resource_title="Recurring pack trip on A-320",
                details={"source": "web"},
                created_at=now - timedelta(days=3),
            ),
            UserActivity(
                id=3,
                user_id=2,
                action="LOGIN",
                created_at=now - timedelta(days=5),
            ),
        ]
    )
    db_session.commit()
    return db_session
