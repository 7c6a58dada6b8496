"""
AnkiConnect adapter for the external card store.

AnkiConnect is an Anki add-on that answers JSON requests of the form
{"action", "version", "params", "key"} with {"result", "error"}.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Any

import httpx

from flashinbox.application.sync.protocols import ExternalContainer, PermissionState
from flashinbox.domain.common.exceptions import ExternalSystemError

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6
BASIC_MODEL_FIELDS = ["Front", "Back"]
BASIC_MODEL_TEMPLATE = {
    "Name": "Card 1",
    "Front": "{{Front}}",
    "Back": "{{FrontSide}}<hr id=answer>{{Back}}",
}


def anki_http_client(base_url: str, timeout: float) -> Iterator[httpx.Client]:
    """Resource provider yielding the HTTP client used to talk to AnkiConnect."""
    client = httpx.Client(base_url=base_url, timeout=timeout)
    try:
        yield client
    finally:
        client.close()


class AnkiConnectClient:
    """External card store backed by AnkiConnect."""

    def __init__(
        self,
        http_client: httpx.Client,
        api_key: str | None = None,
        allow_duplicates: bool = True,
    ) -> None:
        self.http_client = http_client
        self.api_key = api_key
        self.allow_duplicates = allow_duplicates
        self._permission = PermissionState.PROMPT
        self._permission_lock = threading.Lock()

    def _invoke(self, action: str, **params: Any) -> Any:
        payload: dict[str, Any] = {"action": action, "version": ANKI_CONNECT_VERSION}
        if params:
            payload["params"] = params
        if self.api_key:
            payload["key"] = self.api_key

        try:
            response = self.http_client.post("/", json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalSystemError(f"AnkiConnect {action} failed: {e!s}") from e

        if not isinstance(body, dict) or "result" not in body or "error" not in body:
            raise ExternalSystemError(f"AnkiConnect {action} returned an unexpected response")
        if body["error"] is not None:
            raise ExternalSystemError(f"AnkiConnect {action} failed: {body['error']}")
        return body["result"]

    def is_available(self) -> bool:
        try:
            self._invoke("version")
        except ExternalSystemError as e:
            logger.info(f"AnkiConnect not available: {e!s}")
            return False
        return True

    def permission_state(self) -> PermissionState:
        with self._permission_lock:
            return self._permission

    def request_permission(self) -> PermissionState:
        result = self._invoke("requestPermission")
        granted = isinstance(result, dict) and result.get("permission") == "granted"
        state = PermissionState.GRANTED if granted else PermissionState.DENIED
        with self._permission_lock:
            self._permission = state
        return state

    @staticmethod
    def _containers(result: Any, action: str) -> list[ExternalContainer]:
        if not isinstance(result, dict):
            raise ExternalSystemError(f"AnkiConnect {action} returned an unexpected response")
        return [ExternalContainer(id=int(id_), name=name) for name, id_ in result.items()]

    def list_decks(self) -> list[ExternalContainer]:
        return self._containers(self._invoke("deckNamesAndIds"), "deckNamesAndIds")

    def create_deck(self, name: str) -> ExternalContainer:
        deck_id = self._invoke("createDeck", deck=name)
        return ExternalContainer(id=int(deck_id), name=name)

    def list_models(self) -> list[ExternalContainer]:
        return self._containers(self._invoke("modelNamesAndIds"), "modelNamesAndIds")

    def create_basic_model(self, name: str) -> ExternalContainer:
        result = self._invoke(
            "createModel",
            modelName=name,
            inOrderFields=BASIC_MODEL_FIELDS,
            cardTemplates=[BASIC_MODEL_TEMPLATE],
        )
        if not isinstance(result, dict) or "id" not in result:
            raise ExternalSystemError("AnkiConnect createModel returned an unexpected response")
        return ExternalContainer(id=int(result["id"]), name=name)

    def add_note(
        self,
        deck: ExternalContainer,
        model: ExternalContainer,
        fields: tuple[str, str],
        tags: Iterable[str],
    ) -> int:
        field_names = self._invoke("modelFieldNames", modelName=model.name)
        if not isinstance(field_names, list) or len(field_names) < len(fields):
            raise ExternalSystemError(
                f"Model '{model.name}' does not have {len(fields)} fields"
            )

        note_id = self._invoke(
            "addNote",
            note={
                "deckName": deck.name,
                "modelName": model.name,
                "fields": dict(zip(field_names, fields, strict=False)),
                "tags": list(tags),
                "options": {"allowDuplicate": self.allow_duplicates},
            },
        )
        if note_id is None:
            raise ExternalSystemError("AnkiConnect addNote did not return a note id")
        return int(note_id)
