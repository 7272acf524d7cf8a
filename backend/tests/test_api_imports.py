"""Tests for statement import endpoints."""

import pytest
from datetime import date, timedelta

from subscout.config import settings
from subscout.models.import_log import ImportLog, ImportStatus
from subscout.models.transaction import Transaction


@pytest.fixture(autouse=True)
def import_dirs(tmp_path, monkeypatch):
    """Keep uploaded files out of the working directory."""
    monkeypatch.setattr(settings, "import_inbox_path", str(tmp_path / "inbox"))
    monkeypatch.setattr(settings, "import_processed_path", str(tmp_path / "processed"))
    monkeypatch.setattr(settings, "import_failed_path", str(tmp_path / "failed"))
    return tmp_path


def statement_csv(*rows):
    lines = ["Date,Description,Amount"]
    lines.extend(",".join(row) for row in rows)
    return ("\n".join(lines) + "\n").encode()


def recent(days_ago):
    return (date.today() - timedelta(days=days_ago)).strftime("%m/%d/%Y")


SPOTIFY_STATEMENT = statement_csv(
    (recent(61), "SPOTIFY USA", "-9.99"),
    (recent(31), "SPOTIFY USA", "-9.99"),
    (recent(1), "SPOTIFY USA", "-9.99"),
    (recent(15), "ACME PAYROLL", "2500.00"),
)


def upload(client, account_id, content, filename="statement.csv"):
    return client.post(
        "/api/v1/imports",
        files={"file": (filename, content, "text/csv")},
        data={"account_id": account_id},
    )


class TestUploadStatement:
    """Test POST /imports"""

    def test_import_csv(self, client, sample_account, import_dirs):
        response = upload(client, sample_account.id, SPOTIFY_STATEMENT)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["filename"] == "statement.csv"
        assert data["transactions_imported"] == 4
        assert data["transactions_skipped"] == 0
        assert len(list((import_dirs / "processed").iterdir())) == 1

    def test_reimport_skips_duplicates(self, client, sample_account):
        upload(client, sample_account.id, SPOTIFY_STATEMENT)
        response = upload(client, sample_account.id, SPOTIFY_STATEMENT)

        assert response.json()["transactions_imported"] == 0
        assert response.json()["transactions_skipped"] == 4

    def test_imported_charges_are_detected(self, client, sample_account):
        upload(client, sample_account.id, SPOTIFY_STATEMENT)

        data = client.get("/api/v1/subscriptions").json()

        assert data["count"] == 1
        sub = data["subscriptions"][0]
        assert sub["merchant_name"] == "Spotify Usa"
        assert sub["amount"] == 9.99
        assert sub["origin"] == "importedFile"
        assert sub["account_hint"] == "Everyday Checking"

    def test_unsupported_extension(self, client, sample_account):
        response = upload(client, sample_account.id, b"hello", filename="notes.txt")
        assert response.status_code == 400
        assert "not supported" in response.json()["detail"]

    def test_unknown_account(self, client):
        response = upload(client, "missing-account", SPOTIFY_STATEMENT)
        assert response.status_code == 400

    def test_unreadable_file_marks_import_failed(self, client, db_session, sample_account, import_dirs):
        response = upload(client, sample_account.id, b"foo,bar\n1,2\n")

        assert response.status_code == 400
        log = db_session.query(ImportLog).one()
        assert log.status == ImportStatus.failed
        assert log.error_message
        assert len(list((import_dirs / "failed").iterdir())) == 1


MONTHLY_STATEMENTS = [
    statement_csv((recent(days_ago), "NETFLIX.COM", "-15.49"), (recent(days_ago + 3), one_off, "-8.25"))
    for days_ago, one_off in zip((62, 32, 2), ("CORNER DELI", "HARDWARE DEPOT", "CITY PARKING"))
]


def upload_many(client, account_id, contents, mode=None, filename="statement.csv"):
    data = {"account_id": account_id}
    if mode:
        data["mode"] = mode
    return client.post(
        "/api/v1/imports/multi",
        files=[("files", (f"{i}_{filename}", content, "text/csv")) for i, content in enumerate(contents)],
        data=data,
    )


class TestUploadStatements:
    """Test POST /imports/multi"""

    def test_full_mode_stores_and_detects(self, client, db_session, sample_account, import_dirs):
        response = upload_many(client, sample_account.id, MONTHLY_STATEMENTS)

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "full"
        assert data["files"] == 3
        assert data["transactions_parsed"] == 6
        assert data["count"] == 1
        assert data["total_monthly"] == 15.49
        sub = data["subscriptions"][0]
        assert sub["subscription_key"] == "netflix.com"
        assert sub["frequency"] == "monthly"
        assert sub["origin"] == "importedFile"
        assert sub["account_hint"] == "Everyday Checking"
        assert [i["transactions_imported"] for i in data["imports"]] == [2, 2, 2]
        assert db_session.query(Transaction).count() == 6
        assert db_session.query(ImportLog).count() == 3
        assert len(list((import_dirs / "processed").iterdir())) == 3

    def test_subscriptions_only_stores_nothing(self, client, db_session, sample_account, import_dirs):
        response = upload_many(client, sample_account.id, MONTHLY_STATEMENTS, mode="subscriptions_only")

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "subscriptions_only"
        assert data["count"] == 1
        assert data["imports"] == []
        assert db_session.query(Transaction).count() == 0
        assert db_session.query(ImportLog).count() == 0
        assert list((import_dirs / "inbox").iterdir()) == []
        assert not (import_dirs / "processed").exists()

    def test_overlapping_statements_count_each_charge_once(self, client, sample_account):
        overlapping = MONTHLY_STATEMENTS + [MONTHLY_STATEMENTS[1]]

        response = upload_many(client, sample_account.id, overlapping, mode="subscriptions_only")

        data = response.json()
        assert data["transactions_parsed"] == 8
        assert data["subscriptions"][0]["transaction_count"] == 3

    def test_too_few_statements(self, client, sample_account):
        response = upload_many(client, sample_account.id, MONTHLY_STATEMENTS[:2])
        assert response.status_code == 400
        assert "At least 3" in response.json()["detail"]

    def test_too_many_statements(self, client, sample_account):
        response = upload_many(client, sample_account.id, [SPOTIFY_STATEMENT] * 11)
        assert response.status_code == 400
        assert "At most 10" in response.json()["detail"]

    def test_unsupported_extension(self, client, sample_account, import_dirs):
        response = upload_many(client, sample_account.id, MONTHLY_STATEMENTS, filename="notes.txt")

        assert response.status_code == 400
        assert "not supported" in response.json()["detail"]
        assert not (import_dirs / "inbox").exists()

    def test_unknown_account(self, client, db_session, import_dirs):
        response = upload_many(client, "missing-account", MONTHLY_STATEMENTS)

        assert response.status_code == 400
        assert db_session.query(Transaction).count() == 0
        assert list((import_dirs / "inbox").iterdir()) == []

    def test_unreadable_statement_stops_batch(self, client, db_session, sample_account, import_dirs):
        contents = [MONTHLY_STATEMENTS[0], b"foo,bar\n1,2\n", MONTHLY_STATEMENTS[2]]

        response = upload_many(client, sample_account.id, contents)

        assert response.status_code == 400
        statuses = sorted(log.status.value for log in db_session.query(ImportLog))
        assert statuses == ["completed", "failed"]
        assert len(list((import_dirs / "processed").iterdir())) == 1
        assert len(list((import_dirs / "failed").iterdir())) == 2


class TestImportHistory:
    """Test GET /imports/history"""

    def test_history(self, client, sample_account):
        upload(client, sample_account.id, SPOTIFY_STATEMENT)
        upload(client, sample_account.id, SPOTIFY_STATEMENT)

        response = client.get("/api/v1/imports/history")

        assert response.status_code == 200
        logs = response.json()
        assert len(logs) == 2
        assert all(log["status"] == "completed" for log in logs)
        assert all(log["account_id"] == sample_account.id for log in logs)
        assert all(log["file_format"] == "csv" for log in logs)
