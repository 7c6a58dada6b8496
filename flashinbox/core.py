from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from flashinbox.application.inbox.use_cases.card_use_case import CardUseCase
from flashinbox.application.inbox.use_cases.entry_use_case import EntryUseCase
from flashinbox.application.inbox.use_cases.ingestion_use_case import IngestionUseCase
from flashinbox.application.inbox.use_cases.reconciliation_use_case import (
    ReconciliationUseCase,
)
from flashinbox.application.inbox.use_cases.web_clip_use_case import WebClipUseCase
from flashinbox.application.settings.use_cases.app_setting_use_case import AppSettingUseCase
from flashinbox.application.sync.services import AnkiSyncBridge
from flashinbox.application.sync.use_cases.card_sync_use_case import CardSyncUseCase
from flashinbox.config import get_settings
from flashinbox.domain.inbox.services import ContentClassifier
from flashinbox.infrastructure.inbox.repositories import (
    CardRepository,
    EntryRepository,
    FileRepository,
)
from flashinbox.infrastructure.inbox.services.web_clipper import LxmlWebClipper
from flashinbox.infrastructure.settings.repositories import AppSettingRepository
from flashinbox.infrastructure.sync.anki_connect_client import (
    AnkiConnectClient,
    anki_http_client,
)


class Container(containers.DeclarativeContainer):
    """
    Wiring of repositories, services and use cases.

    create_app builds one Container per application and overrides `settings`
    with the Settings it was given. `db` is overridden per request by
    inject_use_case.
    """

    settings = providers.Singleton(get_settings)
    db = providers.Dependency(instance_of=Session)

    # Repositories
    entry_repository = providers.Factory(EntryRepository, db=db)
    card_repository = providers.Factory(CardRepository, db=db)
    app_setting_repository = providers.Factory(AppSettingRepository, db=db)
    file_repository = providers.Factory(FileRepository, storage_root=settings.provided.STORAGE_PATH)

    # External systems (process-wide)
    anki_http_client = providers.Resource(
        anki_http_client,
        base_url=settings.provided.ANKI_CONNECT_URL,
        timeout=settings.provided.ANKI_CONNECT_TIMEOUT,
    )
    anki_connect_client = providers.ThreadSafeSingleton(
        AnkiConnectClient,
        http_client=anki_http_client,
        api_key=settings.provided.ANKI_CONNECT_API_KEY,
        allow_duplicates=settings.provided.ANKI_ALLOW_DUPLICATES,
    )
    anki_sync_bridge = providers.ThreadSafeSingleton(AnkiSyncBridge, store=anki_connect_client)
    web_clipper = providers.Singleton(LxmlWebClipper, timeout=settings.provided.WEB_CLIP_TIMEOUT)

    # Domain services
    content_classifier = providers.Factory(ContentClassifier)

    # Use cases
    entry_use_case = providers.Factory(
        EntryUseCase,
        entry_repository=entry_repository,
        card_repository=card_repository,
        file_repository=file_repository,
    )
    card_use_case = providers.Factory(
        CardUseCase,
        entry_repository=entry_repository,
        card_repository=card_repository,
        default_deck_name=settings.provided.DEFAULT_DECK_NAME,
    )
    ingestion_use_case = providers.Factory(
        IngestionUseCase,
        entry_repository=entry_repository,
        file_repository=file_repository,
        classifier=content_classifier,
        max_upload_bytes=settings.provided.max_upload_bytes,
    )
    reconciliation_use_case = providers.Factory(
        ReconciliationUseCase,
        entry_repository=entry_repository,
        file_repository=file_repository,
    )
    web_clip_use_case = providers.Factory(
        WebClipUseCase,
        entry_repository=entry_repository,
        web_clipper=web_clipper,
    )
    card_sync_use_case = providers.Factory(
        CardSyncUseCase,
        entry_repository=entry_repository,
        card_repository=card_repository,
        bridge=anki_sync_bridge,
        reconciliation=reconciliation_use_case,
        model_name=settings.provided.ANKI_MODEL_NAME,
        default_deck_name=settings.provided.DEFAULT_DECK_NAME,
    )
    app_setting_use_case = providers.Factory(
        AppSettingUseCase,
        app_setting_repository=app_setting_repository,
    )
