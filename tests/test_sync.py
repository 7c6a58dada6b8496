"""Tests for sending cards to Anki through the API."""

from collections.abc import Callable

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flashinbox import models
from flashinbox.config import Settings
from flashinbox.domain.inbox.entities import Card, Entry
from tests.fakes import FakeAnkiConnect


class TestAnkiStatus:
    def test_status_before_permission(self, client: TestClient) -> None:
        response = client.get("/api/v1/anki/status")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"available": True, "permission": "prompt"}

    def test_status_when_anki_is_down(
        self, client: TestClient, fake_anki: FakeAnkiConnect
    ) -> None:
        fake_anki.available = False

        response = client.get("/api/v1/anki/status")

        assert response.json()["available"] is False

    def test_permission_granted(self, client: TestClient) -> None:
        response = client.post("/api/v1/anki/permission")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"granted": True}
        assert client.get("/api/v1/anki/status").json()["permission"] == "granted"

    def test_permission_denied(self, client: TestClient, fake_anki: FakeAnkiConnect) -> None:
        fake_anki.permission = "denied"

        response = client.post("/api/v1/anki/permission")

        assert response.json() == {"granted": False}
        assert client.get("/api/v1/anki/status").json()["permission"] == "denied"

    def test_permission_request_without_anki(
        self, client: TestClient, fake_anki: FakeAnkiConnect
    ) -> None:
        fake_anki.available = False
        response = client.post("/api/v1/anki/permission")
        assert response.status_code == status.HTTP_502_BAD_GATEWAY


class TestSyncCard:
    """Test suite for POST /cards/:id/sync endpoint."""

    def test_card_is_added_with_entry_deck(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry(deck_name="Biology")
        first, _second = make_cards(entry.id, 2)

        response = client.post(f"/api/v1/cards/{first.id}/sync")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["card"]["status"] == "added"
        assert data["entry_removed"] is False

        note = fake_anki.notes[data["card"]["external_note_id"]]
        assert note["deckName"] == "Biology"
        assert note["modelName"] == "flashinbox Basic"
        assert note["fields"] == {"Front": "Question 0", "Back": "Answer 0"}
        assert note["tags"] == ["biology"]
        assert "Biology" in fake_anki.decks
        assert "flashinbox Basic" in fake_anki.models

    def test_permission_requested_on_first_send(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        (card,) = make_cards(make_entry().id, 1)

        client.post(f"/api/v1/cards/{card.id}/sync")

        assert "requestPermission" in fake_anki.actions()
        assert fake_anki.actions().index("requestPermission") < fake_anki.actions().index(
            "addNote"
        )

    def test_last_card_removes_entry(
        self,
        client: TestClient,
        db_session: Session,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        first, second = make_cards(entry.id, 2)

        client.post(f"/api/v1/cards/{first.id}/sync")
        response = client.post(f"/api/v1/cards/{second.id}/sync")

        assert response.json()["entry_removed"] is True
        assert db_session.get(models.InboxEntry, entry.id.value) is None
        assert db_session.query(models.GeneratedCard).count() == 0

    def test_anki_unavailable_keeps_card_pending(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        db_session: Session,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        (card,) = make_cards(make_entry().id, 1)
        fake_anki.available = False

        response = client.post(f"/api/v1/cards/{card.id}/sync")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        db_card = db_session.get(models.GeneratedCard, card.id.value)
        assert db_card is not None
        assert db_card.status == "pending"
        assert db_card.external_note_id is None

    def test_rejected_note_keeps_card_pending(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        db_session: Session,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        (card,) = make_cards(make_entry().id, 1)
        fake_anki.fail_add_note = True

        response = client.post(f"/api/v1/cards/{card.id}/sync")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "duplicate" in response.json()["detail"]
        db_card = db_session.get(models.GeneratedCard, card.id.value)
        assert db_card is not None
        assert db_card.status == "pending"

    def test_permission_denied(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        (card,) = make_cards(make_entry().id, 1)
        fake_anki.permission = "denied"

        response = client.post(f"/api/v1/cards/{card.id}/sync")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert fake_anki.notes == {}

    def test_card_with_repeated_front_is_added(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        (first,) = make_cards(make_entry().id, 1)
        (repeated,) = make_cards(make_entry().id, 1)
        client.post(f"/api/v1/cards/{first.id}/sync")

        response = client.post(f"/api/v1/cards/{repeated.id}/sync")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["card"]["status"] == "added"
        assert len(fake_anki.notes) == 2
        add_requests = [r for r in fake_anki.requests if r["action"] == "addNote"]
        assert all(r["params"]["note"]["options"]["allowDuplicate"] is True for r in add_requests)

    def test_already_added_card(
        self,
        client: TestClient,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        first, _second = make_cards(entry.id, 2)
        client.post(f"/api/v1/cards/{first.id}/sync")

        response = client.post(f"/api/v1/cards/{first.id}/sync")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_unknown_card(self, client: TestClient) -> None:
        response = client.post("/api/v1/cards/nope/sync")
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSyncEntry:
    """Test suite for POST /entries/:id/sync endpoint."""

    def test_all_cards_added_and_pdf_removed(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        db_session: Session,
        settings: Settings,
    ) -> None:
        ingested = client.post(
            "/api/v1/ingest/pdf",
            files={"file": ("notes.pdf", b"%PDF-1.4 body", "application/pdf")},
        ).json()["entry"]
        entry_id = ingested["id"]
        client.post(
            f"/api/v1/entries/{entry_id}/cards/commit",
            json={"cards": [{"front": "Q1", "back": "A1"}, {"front": "Q2", "back": "A2"}]},
        )

        response = client.post(f"/api/v1/entries/{entry_id}/sync")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert len(data["added"]) == 2
        assert data["failed"] == {}
        assert data["entry_removed"] is True
        assert len(fake_anki.notes) == 2
        assert {note["deckName"] for note in fake_anki.notes.values()} == {"flashinbox"}
        assert db_session.get(models.InboxEntry, entry_id) is None
        assert not (settings.STORAGE_PATH / ingested["content"]).exists()

    def test_partial_failure_keeps_entry(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        db_session: Session,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        cards = make_cards(entry.id, 2)
        fake_anki.fail_add_note = True

        response = client.post(f"/api/v1/entries/{entry.id}/sync")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is False
        assert data["added"] == []
        assert set(data["failed"]) == {card.id.value for card in cards}
        assert data["entry_removed"] is False
        assert db_session.get(models.InboxEntry, entry.id.value) is not None

    def test_retry_after_failure(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        make_cards(entry.id, 2)
        fake_anki.fail_add_note = True
        client.post(f"/api/v1/entries/{entry.id}/sync")
        fake_anki.fail_add_note = False

        response = client.post(f"/api/v1/entries/{entry.id}/sync")

        assert response.json()["success"] is True
        assert response.json()["entry_removed"] is True

    def test_anki_unavailable(
        self,
        client: TestClient,
        fake_anki: FakeAnkiConnect,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        make_cards(entry.id, 1)
        fake_anki.available = False

        response = client.post(f"/api/v1/entries/{entry.id}/sync")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_unknown_entry(self, client: TestClient) -> None:
        response = client.post("/api/v1/entries/nope/sync")
        assert response.status_code == status.HTTP_404_NOT_FOUND
