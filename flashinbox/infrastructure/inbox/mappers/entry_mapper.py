"""Mapper for InboxEntry ORM <-> Entry domain conversion."""

from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import ContentType, Entry
from flashinbox.models import InboxEntry as InboxEntryORM


class EntryMapper:
    """Mapper for InboxEntry ORM <-> Entry domain conversion."""

    def to_domain(self, orm_model: InboxEntryORM) -> Entry:
        """Convert ORM model to domain entity."""
        return Entry.create_with_id(
            id=EntryId(orm_model.id),
            content_type=ContentType(orm_model.content_type),
            content=orm_model.content,
            preview=orm_model.preview,
            created_at=orm_model.created_at,
            title=orm_model.title,
            extracted_text=orm_model.extracted_text,
            deck_name=orm_model.deck_name,
            is_locked=orm_model.is_locked,
        )

    def to_orm(self, entry: Entry, orm_model: InboxEntryORM | None = None) -> InboxEntryORM:
        """Convert domain entity to ORM model, updating orm_model in place if given."""
        if orm_model is None:
            orm_model = InboxEntryORM(id=entry.id.value)
        orm_model.content_type = entry.content_type.value
        orm_model.content = entry.content
        orm_model.preview = entry.preview
        orm_model.title = entry.title
        orm_model.extracted_text = entry.extracted_text
        orm_model.deck_name = entry.deck_name
        orm_model.is_locked = entry.is_locked
        orm_model.created_at = entry.created_at
        return orm_model
