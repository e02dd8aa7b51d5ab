"""Document-style persistence helpers.

Handlers run exactly one operation against a collection and hand the raw
result back to the client, shaped the way a document store reports it:
insert acknowledgements, matched/modified counts and deleted counts.
"""

from typing import Annotated, Any, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, ValidationError, WrapValidator
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

ID_FIELD = "_id"
RESERVED_FIELDS = frozenset({ID_FIELD, "id", "details"})

T = TypeVar("T")


def new_id() -> str:
    return uuid4().hex


class Unparsed:
    """A client value that does not fit its column type, kept as sent."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Unparsed) and other.value == self.value

    def __repr__(self) -> str:
        return f"Unparsed({self.value!r})"


def _keep_unparsed(value: Any, handler):
    try:
        return handler(value)
    except ValidationError:
        return Unparsed(value)


# Optional field whose mistyped values are stored in ``details`` instead of rejected.
Lenient = Annotated[Optional[T], WrapValidator(_keep_unparsed)]


class DocumentPayload(BaseModel):
    """Request body for a collection insert.

    Known fields are declared by subclasses as ``Lenient[...]``; anything else
    the client sends, and any known field whose value does not fit its type,
    is kept and stored in the document's ``details``.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def insert_result(inserted_id: str) -> dict:
    return {"acknowledged": True, "insertedId": inserted_id}


def update_result(matched: int, modified: int) -> dict:
    return {
        "acknowledged": True,
        "matchedCount": matched,
        "modifiedCount": modified,
        "upsertedId": None,
    }


def delete_result(deleted: int) -> dict:
    return {"acknowledged": True, "deletedCount": deleted}


def split_payload(payload: DocumentPayload, protected: frozenset[str] = frozenset()) -> tuple[dict, dict]:
    extra = payload.model_extra or {}
    skipped = RESERVED_FIELDS | protected
    columns = {}
    details = {field: value for field, value in extra.items() if field not in skipped}
    for field in type(payload).model_fields:
        if field in skipped:
            continue
        value = getattr(payload, field)
        if isinstance(value, Unparsed):
            details[to_camel(field)] = value.value
            value = None
        columns[field] = value
    return columns, details


def to_document(record) -> dict:
    document = {ID_FIELD: record.id}
    details = record.details or {}
    document.update(details)
    for column in record.__table__.columns:
        if column.name in ("id", "details"):
            continue
        key = to_camel(column.name)
        value = getattr(record, column.name)
        # An empty column never hides a value the client stored in details.
        if value is None and key in details:
            continue
        document[key] = value
    return document


def insert_document(
    db: Session,
    model,
    payload: DocumentPayload,
    protected: frozenset[str] = frozenset(),
) -> dict:
    columns, details = split_payload(payload, protected)
    record = model(**columns, details=details)
    db.add(record)
    db.commit()
    return insert_result(record.id)


def update_by_id(db: Session, model, record_id: str, values: dict) -> dict:
    record = db.get(model, record_id) if record_id is not None else None
    if record is None:
        return update_result(0, 0)

    modified = False
    for field, value in values.items():
        if getattr(record, field) != value:
            setattr(record, field, value)
            modified = True

    if modified:
        db.commit()
    return update_result(1, 1 if modified else 0)


def delete_by_id(db: Session, model, record_id: str) -> dict:
    deleted = db.query(model).filter(model.id == record_id).delete(synchronize_session=False)
    db.commit()
    return delete_result(deleted)
