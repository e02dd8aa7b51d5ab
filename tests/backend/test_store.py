from backend.models.booked_class import BookedClass
from backend.store import DocumentPayload, Lenient, split_payload, to_document


class _Payload(DocumentPayload):
    class_name: str | None = None


def test_split_payload_separates_known_and_opaque_fields() -> None:
    payload = _Payload.model_validate({'className': 'Yoga', 'mat': 'provided', 'id': 'forged'})

    columns, details = split_payload(payload)

    assert columns == {'class_name': 'Yoga'}
    assert details == {'mat': 'provided'}


def test_split_payload_drops_protected_fields() -> None:
    payload = _Payload.model_validate({'className': 'Yoga', 'role': 'admin'})

    _, details = split_payload(payload, protected=frozenset({'role'}))

    assert details == {}


def test_to_document_keeps_known_fields_over_opaque_ones() -> None:
    booking = BookedClass(id='b' * 32, email='learner@x.com', details={'email': 'spoofed@x.com', 'note': 'hi'})

    document = to_document(booking)

    assert document['_id'] == 'b' * 32
    assert document['email'] == 'learner@x.com'
    assert document['note'] == 'hi'
    assert document['classId'] is None


class _SeatsPayload(DocumentPayload):
    available_seats: Lenient[int] = None
    name: Lenient[str] = None


def test_mistyped_known_field_is_kept_in_details() -> None:
    payload = _SeatsPayload.model_validate({'availableSeats': 'ten', 'name': 'Yoga'})

    columns, details = split_payload(payload)

    assert columns == {'available_seats': None, 'name': 'Yoga'}
    assert details == {'availableSeats': 'ten'}


def test_coercible_known_field_is_parsed() -> None:
    payload = _SeatsPayload.model_validate({'availableSeats': '10'})

    columns, details = split_payload(payload)

    assert columns['available_seats'] == 10
    assert details == {}


def test_to_document_shows_details_value_behind_empty_column() -> None:
    booking = BookedClass(id='b' * 32, price=None, details={'price': 'twenty'})

    document = to_document(booking)

    assert document['price'] == 'twenty'
