"""Field rules enforced before anything reaches the gateway."""

import dataclasses

import pytest

from idpay_client import DateRange, PaymentRequest, TransactionListQuery, TransactionQuery
from idpay_client.core.validation import (
    ValidationError,
    normalize_email,
    normalize_phone,
    validate_amount,
    validate_text,
)

CALLBACK = "https://shop.example.com/callback"


def _request(**overrides):
    values = {"order_id": "101", "amount": 10_000, "callback": CALLBACK}
    values.update(overrides)
    return PaymentRequest(**values)


@pytest.mark.parametrize("amount", [1_000, 500_000_000])
def test_amount_bounds_are_inclusive(amount):
    assert _request(amount=amount).amount == amount


@pytest.mark.parametrize("amount", [999, 500_000_001, -1_000, 0])
def test_amount_out_of_range_is_rejected(amount):
    with pytest.raises(ValidationError) as excinfo:
        _request(amount=amount)

    assert excinfo.value.field == "amount"
    assert excinfo.value.value == amount


@pytest.mark.parametrize("amount", [True, 1000.0, "1000"])
def test_amount_must_be_an_int(amount):
    with pytest.raises(ValidationError):
        validate_amount("amount", amount)


@pytest.mark.parametrize(
    "field, limit",
    [
        ("order_id", 50),
        ("description", 255),
        ("name", 255),
        ("email", 255),
        ("phone", 11),
        ("callback", 2048),
    ],
)
def test_string_length_limits(field, limit):
    accepted = _request(**{field: "x" * limit})
    assert len(getattr(accepted, field)) == limit

    with pytest.raises(ValidationError) as excinfo:
        _request(**{field: "x" * (limit + 1)})
    assert excinfo.value.field == field


def test_fields_are_trimmed():
    request = _request(order_id="  101 ", name="  John Doe  ", callback=f" {CALLBACK}\n")

    assert request.order_id == "101"
    assert request.name == "John Doe"
    assert request.callback == CALLBACK


def test_revalidating_a_valid_request_is_stable():
    request = _request(name="  John Doe  ", description=" first order ")
    again = PaymentRequest(**dataclasses.asdict(request))

    assert again == request


def test_required_fields_must_not_be_blank():
    with pytest.raises(ValidationError) as excinfo:
        _request(order_id="   ")
    assert excinfo.value.field == "order_id"

    with pytest.raises(ValidationError):
        _request(callback=None)


def test_invalid_email_is_accepted_as_input():
    request = _request(email="not-an-email")

    assert request.email == "not-an-email"
    assert normalize_email(request.email) == ""


def test_request_is_immutable():
    request = _request()

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.amount = 2_000


def test_validate_text_leaves_missing_optional_values_alone():
    assert validate_text("name", None, max_length=255) is None


@pytest.mark.parametrize(
    "email, expected",
    [
        ("buyer@example.com", "buyer@example.com"),
        (" buyer.name+tag@mail.example.ir ", "buyer.name+tag@mail.example.ir"),
        ("not-an-email", ""),
        ("user@localhost", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_email(email, expected):
    assert normalize_email(email) == expected


@pytest.mark.parametrize(
    "phone, expected",
    [
        ("09121234567", "09121234567"),
        ("9351234567", "9351234567"),
        ("+989121234567", "+989121234567"),
        ("0 9121234567", "0 9121234567"),
        ("09551234567", ""),
        ("0212345678", ""),
        ("phone", ""),
        (None, ""),
    ],
)
def test_normalize_phone(phone, expected):
    assert normalize_phone(phone) == expected


def test_transaction_query_requires_both_identifiers():
    query = TransactionQuery(" abc ", " 101 ")
    assert (query.transaction_id, query.order_id) == ("abc", "101")

    with pytest.raises(ValidationError):
        TransactionQuery("", "101")


def test_list_query_validation():
    query = TransactionListQuery(order_id=" 101 ", statuses=[100, 101])
    assert query.order_id == "101"
    assert query.statuses == (100, 101)

    with pytest.raises(ValidationError):
        TransactionListQuery(page=-1)
    with pytest.raises(ValidationError):
        TransactionListQuery(page_size=0)
    with pytest.raises(ValidationError):
        TransactionListQuery(amount=999)
    with pytest.raises(ValidationError):
        TransactionListQuery(transaction_id="x" * 51)


def test_date_range_must_be_ordered():
    assert DateRange(min=10, max=20) == DateRange(10, 20)

    with pytest.raises(ValidationError):
        DateRange(min=20, max=10)


@pytest.mark.parametrize("field", ["card_no", "hashed_card_no"])
def test_list_query_card_filters_must_be_strings(field):
    with pytest.raises(ValidationError) as excinfo:
        TransactionListQuery(**{field: 123456})

    assert excinfo.value.field == field


def test_list_query_card_filters_are_trimmed_and_bounded():
    digest = "a" * 64
    query = TransactionListQuery(card_no=" 123456******1234 ", hashed_card_no=digest)
    assert query.card_no == "123456******1234"
    assert query.hashed_card_no == digest

    assert TransactionListQuery(card_no="   ").card_no is None
    with pytest.raises(ValidationError):
        TransactionListQuery(hashed_card_no=digest + "a")


@pytest.mark.parametrize("statuses", [100, "100", b"100", None])
def test_list_query_statuses_must_be_a_sequence(statuses):
    with pytest.raises(ValidationError) as excinfo:
        TransactionListQuery(statuses=statuses)

    assert excinfo.value.field == "statuses"
