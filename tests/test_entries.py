"""Tests for entry API endpoints."""

import io
from collections.abc import Callable

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flashinbox import models
from flashinbox.config import Settings
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Card, ContentType, Entry
from flashinbox.infrastructure.inbox.repositories import CardRepository, FileRepository
from tests.fakes import FakeWebClipper


class TestListAndGet:
    def test_list_newest_first(self, client: TestClient) -> None:
        client.put(
            "/api/v1/entries",
            json={
                "id": "older",
                "content_type": "text",
                "content": "first",
                "created_at": "2024-01-01T00:00:00Z",
            },
        )
        client.put(
            "/api/v1/entries",
            json={
                "id": "newer",
                "content_type": "text",
                "content": "second",
                "created_at": "2024-02-01T00:00:00Z",
            },
        )

        response = client.get("/api/v1/entries")

        assert response.status_code == status.HTTP_200_OK
        assert [e["id"] for e in response.json()["entries"]] == ["newer", "older"]

    def test_get_entry_with_cards(
        self,
        client: TestClient,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        make_cards(entry.id, 3)

        response = client.get(f"/api/v1/entries/{entry.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["entry"]["id"] == entry.id.value
        assert [c["front"] for c in data["cards"]] == ["Question 0", "Question 1", "Question 2"]
        assert data["total_card_count"] == 3
        assert data["pending_card_count"] == 3
        assert data["cards"][0]["tags"] == ["biology"]


class TestSaveEntry:
    def test_insert_generates_id_and_preview(self, client: TestClient) -> None:
        response = client.put(
            "/api/v1/entries", json={"content_type": "text", "content": "a" * 120}
        )

        assert response.status_code == status.HTTP_200_OK
        entry = response.json()["entry"]
        assert entry["id"]
        assert entry["preview"] == "a" * 100 + "..."

    def test_unknown_content_type_rejected(self, client: TestClient) -> None:
        response = client.put("/api/v1/entries", json={"content_type": "video", "content": "x"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_locked_entry_is_kept_on_upsert(
        self, client: TestClient, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry(is_locked=True, deck_name="A")

        response = client.put(
            "/api/v1/entries",
            json={
                "id": entry.id.value,
                "content_type": "text",
                "content": "edited",
                "deck_name": "B",
                "is_locked": False,
            },
        )

        assert response.status_code == status.HTTP_200_OK
        saved = response.json()["entry"]
        assert saved["is_locked"] is True
        assert saved["content"] == "Mitochondria are the powerhouse of the cell"
        assert saved["deck_name"] == "A"
        detail = client.get(f"/api/v1/entries/{entry.id}").json()
        assert detail["entry"]["deck_name"] == "A"

    def test_new_pdf_entry_rejected(self, client: TestClient) -> None:
        response = client.put(
            "/api/v1/entries",
            json={"id": "fake-pdf", "content_type": "pdf", "content": "../../etc/passwd"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert client.get("/api/v1/entries/fake-pdf").status_code == status.HTTP_404_NOT_FOUND

    def test_pdf_reference_cannot_change(self, client: TestClient, settings: Settings) -> None:
        created = client.post(
            "/api/v1/ingest/pdf",
            files={"file": ("notes.pdf", b"%PDF-1.4 body", "application/pdf")},
        ).json()["entry"]
        stored = settings.STORAGE_PATH / created["content"]

        moved = client.put(
            "/api/v1/entries",
            json={"id": created["id"], "content_type": "pdf", "content": "other.pdf"},
        )
        retyped = client.put(
            "/api/v1/entries",
            json={"id": created["id"], "content_type": "text", "content": "plain text"},
        )

        assert moved.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert retyped.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        detail = client.get(f"/api/v1/entries/{created['id']}").json()
        assert detail["entry"]["content_type"] == "pdf"
        assert detail["entry"]["content"] == created["content"]
        assert stored.exists()

    def test_pdf_entry_upsert_with_same_reference(self, client: TestClient) -> None:
        created = client.post(
            "/api/v1/ingest/pdf",
            files={"file": ("notes.pdf", b"%PDF-1.4 body", "application/pdf")},
        ).json()["entry"]

        response = client.put(
            "/api/v1/entries",
            json={
                "id": created["id"],
                "content_type": "pdf",
                "content": created["content"],
                "title": "Renamed",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["entry"]["title"] == "Renamed"


class TestDeleteEntry:
    def test_delete_removes_cards(
        self,
        client: TestClient,
        db_session: Session,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        make_cards(entry.id, 2)

        response = client.delete(f"/api/v1/entries/{entry.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        assert db_session.query(models.GeneratedCard).count() == 0
        assert client.get(f"/api/v1/entries/{entry.id}").status_code == status.HTTP_404_NOT_FOUND

    def test_delete_removes_stored_pdf(self, client: TestClient, settings: Settings) -> None:
        created = client.post(
            "/api/v1/ingest/pdf",
            files={"file": ("notes.pdf", b"%PDF-1.4 body", "application/pdf")},
        ).json()["entry"]
        stored = settings.STORAGE_PATH / created["content"]
        assert stored.exists()

        response = client.delete(f"/api/v1/entries/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert not stored.exists()

    def test_delete_unknown(self, client: TestClient) -> None:
        assert client.delete("/api/v1/entries/nope").status_code == status.HTTP_404_NOT_FOUND


class TestLockAndEdit:
    def test_lock_is_idempotent(self, client: TestClient, make_entry: Callable[..., Entry]) -> None:
        entry = make_entry()

        first = client.post(f"/api/v1/entries/{entry.id}/lock")
        second = client.post(f"/api/v1/entries/{entry.id}/lock")

        assert first.status_code == second.status_code == status.HTTP_200_OK
        assert first.json()["entry"]["is_locked"] is True
        assert second.json()["entry"]["is_locked"] is True

    def test_update_deck_name(self, client: TestClient, make_entry: Callable[..., Entry]) -> None:
        entry = make_entry()

        response = client.patch(
            f"/api/v1/entries/{entry.id}/deck-name", json={"deck_name": "Biology"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["entry"]["deck_name"] == "Biology"

    def test_deck_name_of_locked_entry_rejected(
        self, client: TestClient, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry(is_locked=True)
        response = client.patch(
            f"/api/v1/entries/{entry.id}/deck-name", json={"deck_name": "Biology"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_deck_name_unknown_entry(self, client: TestClient) -> None:
        response = client.patch("/api/v1/entries/nope/deck-name", json={"deck_name": "Biology"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_extracted_content_is_capped(
        self, client: TestClient, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry()

        response = client.patch(
            f"/api/v1/entries/{entry.id}/extracted-content",
            json={"title": "Scan", "extracted_text": "w" * 30_000},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["entry"]
        assert data["title"] == "Scan"
        assert len(data["extracted_text"]) == 25_000


class TestClip:
    def test_clip_url_entry(
        self,
        client: TestClient,
        make_entry: Callable[..., Entry],
        fake_clipper: FakeWebClipper,
    ) -> None:
        entry = make_entry("https://example.com/post", content_type=ContentType.URL)
        fake_clipper.title = "A post"
        fake_clipper.text = "t" * 26_000

        response = client.post(f"/api/v1/entries/{entry.id}/clip")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["entry"]
        assert data["title"] == "A post"
        assert len(data["extracted_text"]) == 25_000
        assert fake_clipper.urls == ["https://example.com/post"]

    def test_clip_text_entry_rejected(
        self, client: TestClient, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry()
        response = client.post(f"/api/v1/entries/{entry.id}/clip")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestAutoRemove:
    def test_auto_remove_lifecycle(
        self,
        client: TestClient,
        card_repository: CardRepository,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        first, second = make_cards(entry.id, 2)

        response = client.post(f"/api/v1/entries/{entry.id}/auto-remove")
        assert response.json() == {"removed": False}

        first.mark_added(11)
        card_repository.save(first)
        response = client.post(f"/api/v1/entries/{entry.id}/auto-remove")
        assert response.json() == {"removed": False}

        second.mark_added(12)
        card_repository.save(second)
        response = client.post(f"/api/v1/entries/{entry.id}/auto-remove")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"removed": True}

        assert client.get(f"/api/v1/entries/{entry.id}").status_code == status.HTTP_404_NOT_FOUND

    def test_entry_without_cards_is_kept(
        self, client: TestClient, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry()
        response = client.post(f"/api/v1/entries/{entry.id}/auto-remove")
        assert response.json() == {"removed": False}

    def test_auto_remove_deletes_pdf(
        self,
        client: TestClient,
        settings: Settings,
        file_repository: FileRepository,
        card_repository: CardRepository,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry_id = EntryId.generate()
        reference = file_repository.save_pdf(io.BytesIO(b"%PDF-1.4"), entry_id)
        entry = make_entry(reference, content_type=ContentType.PDF, id=entry_id)
        (card,) = make_cards(entry.id, 1)
        card.mark_added(99)
        card_repository.save(card)

        response = client.post(f"/api/v1/entries/{entry.id}/auto-remove")

        assert response.json() == {"removed": True}
        assert not (settings.STORAGE_PATH / reference).exists()
