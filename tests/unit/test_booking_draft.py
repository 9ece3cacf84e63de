"""Validación del paso 1, persistencia del borrador y restauración desde la URL."""

import json
import logging
from datetime import date

import pytest

from booking_api.application.draft_store import (
    DraftStore,
    deserialize_draft,
    serialize_draft,
    to_query_params,
)
from booking_api.application.schemas import (
    MAX_SPAN_MESSAGE,
    MIN_SPAN_MESSAGE,
    validate_checkout,
    validate_rental_details,
)
from booking_api.application.use_cases.restore_draft import RestoreDraftUseCase
from booking_api.application.use_cases.submit_details import SubmitDetailsUseCase
from booking_api.domain.constants import DRAFT_STORAGE_KEY
from booking_api.domain.entities import BookingDraft, CustomerType, DriverAgeBracket
from booking_api.domain.errors import DraftValidationError
from booking_api.infrastructure.in_memory import InMemoryDraftStorage
from tests.factories import checkout_form, details_payload, make_details


class TestRentalDetailsValidation:
    def test_valid_payload_returns_details(self):
        details = validate_rental_details(details_payload())

        assert details.pickup_date == date(2025, 3, 1)
        assert details.return_date == date(2025, 4, 5)
        assert details.driver_age == DriverAgeBracket.BETWEEN_25_AND_70
        assert details.customer_type == CustomerType.INDIVIDUAL
        assert details.promo_code is None

    def test_same_as_pickup_copies_location(self):
        details = validate_rental_details(
            details_payload(same_as_pickup=True, return_location="Somewhere Else")
        )

        assert details.return_location == "London Heathrow Terminal 5"

    def test_separate_return_location(self):
        details = validate_rental_details(
            details_payload(same_as_pickup=False, return_location="Manchester Airport")
        )

        assert details.return_location == "Manchester Airport"

    def test_short_return_location_rejected_when_separate(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_rental_details(details_payload(same_as_pickup=False, return_location="MAN"))

        assert exc_info.value.errors == {"return_location": "Please enter a valid return location"}

    def test_all_field_errors_reported_together(self):
        payload = details_payload(
            pickup_location="abc",
            customer_phone="123",
            driver_age="",
            customer_email="not-an-email",
            return_date="2025-03-11",
        )

        with pytest.raises(DraftValidationError) as exc_info:
            validate_rental_details(payload)

        errors = exc_info.value.errors
        assert errors["pickup_location"] == "Please enter a valid pickup location"
        assert errors["customer_phone"] == "Please enter a valid phone number (min 10 digits)"
        assert errors["driver_age"] == "Please select driver age range"
        assert errors["customer_email"] == "Please enter a valid email address"
        # Span rules only run once every field is valid.
        assert "return_date" not in errors

    def test_out_of_range_clock_time(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_rental_details(details_payload(pickup_time="25:00"))

        assert exc_info.value.errors == {"pickup_time": "Invalid time format"}

    def test_promo_code_normalized(self):
        details = validate_rental_details(details_payload(promo_code="  summer10 "))

        assert details.promo_code == "SUMMER10"

    def test_promo_code_too_long(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_rental_details(details_payload(promo_code="X" * 21))

        assert "promo_code" in exc_info.value.errors

    @pytest.mark.parametrize(
        "return_date,return_time",
        [
            ("2025-03-31", "10:00"),  # 30 days
            ("2025-05-30", "10:00"),  # 90 days
            ("2025-05-30", "18:00"),  # 90 days and 8 hours
        ],
    )
    def test_span_within_limits(self, return_date, return_time):
        details = validate_rental_details(
            details_payload(return_date=return_date, return_time=return_time)
        )

        assert details.return_date.isoformat() == return_date

    @pytest.mark.parametrize(
        "return_date,return_time,message",
        [
            ("2025-03-30", "10:00", MIN_SPAN_MESSAGE),
            ("2025-03-31", "09:30", MIN_SPAN_MESSAGE),
            ("2025-02-20", "10:00", MIN_SPAN_MESSAGE),
            ("2025-05-31", "10:00", MAX_SPAN_MESSAGE),
        ],
    )
    def test_span_outside_limits(self, return_date, return_time, message):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_rental_details(
                details_payload(return_date=return_date, return_time=return_time)
            )

        assert exc_info.value.errors == {"return_date": message}


class TestCheckoutValidation:
    def test_valid_form(self):
        form = validate_checkout(checkout_form())

        assert form.license_number == "LOVEL815106AA9"

    def test_terms_must_be_accepted(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_checkout(checkout_form(agree_terms=False))

        assert exc_info.value.errors == {"agree_terms": "You must agree to terms"}

    def test_missing_fields(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_checkout({"agree_terms": True})

        assert set(exc_info.value.errors) == {
            "customer_name",
            "customer_email",
            "customer_phone",
            "license_number",
        }


class TestDraftSerialization:
    def test_round_trip(self):
        draft = BookingDraft(
            details=make_details(promo_code="SPRING"),
            selected_vehicle_id="veh-rolls",
            selected_extra_ids=frozenset({"extra-seat"}),
        )

        assert deserialize_draft(serialize_draft(draft)) == draft

    def test_stored_keys_are_camel_case(self):
        data = json.loads(serialize_draft(BookingDraft(details=make_details())))

        assert data["pickupDate"] == "2025-03-01"
        assert data["sameAsPickup"] is True
        assert data["vehicleId"] is None
        assert data["selectedExtras"] == []

    def test_datetime_strings_read_back_as_dates(self):
        data = json.loads(serialize_draft(BookingDraft(details=make_details())))
        data["pickupDate"] = "2025-03-01T00:00:00.000Z"
        data["returnDate"] = "2025-04-05T00:00:00.000Z"

        draft = deserialize_draft(json.dumps(data).encode())

        assert draft.details.pickup_date == date(2025, 3, 1)
        assert draft.details.return_date == date(2025, 4, 5)

    def test_query_params_skip_empty_promo(self):
        params = to_query_params(BookingDraft(details=make_details()))

        assert params == {
            "pickup": "2025-03-01",
            "pickupTime": "10:00",
            "return": "2025-04-05",
            "returnTime": "10:00",
            "pl": "London Heathrow Terminal 5",
            "rl": "London Heathrow Terminal 5",
            "age": "25_70",
        }

    def test_query_params_include_vehicle_and_promo(self):
        draft = BookingDraft(details=make_details(promo_code="SPRING"), selected_vehicle_id="veh-1")

        params = to_query_params(draft)

        assert params["promo"] == "SPRING"
        assert params["vehicle"] == "veh-1"


class TestDraftStore:
    async def test_load_without_draft(self, draft_store: DraftStore):
        assert await draft_store.load() is None

    async def test_save_and_load(self, draft_store: DraftStore, stored_draft: BookingDraft):
        assert await draft_store.load() == stored_draft

    @pytest.mark.parametrize("raw", [b"{not json", b"[]", b'{"pickupLocation": "Heathrow"}'])
    async def test_corrupt_draft_treated_as_absent(self, raw, caplog):
        storage = InMemoryDraftStorage()
        await storage.set(DRAFT_STORAGE_KEY, raw)

        with caplog.at_level(logging.WARNING):
            assert await DraftStore(storage).load() is None

        assert "Failed to load booking context" in caplog.text

    async def test_namespaces_are_isolated(self):
        shared = InMemoryDraftStorage()
        await DraftStore(shared).save(BookingDraft(details=make_details()))

        assert await DraftStore(shared.for_namespace("other-tab")).load() is None

    async def test_restore_overrides_locations_only(self, draft_store: DraftStore):
        await draft_store.save(
            BookingDraft(
                details=make_details(same_as_pickup=False, return_location="Manchester Airport")
            )
        )

        draft = await draft_store.restore(
            {"pl": "Gatwick Airport", "rl": "Luton Airport", "pickup": "2030-01-01"}
        )

        assert draft.details.pickup_location == "Gatwick Airport"
        assert draft.details.return_location == "Luton Airport"
        assert draft.details.pickup_date == date(2025, 3, 1)
        assert draft.details.customer_name == "Ada Lovelace"

    async def test_restore_keeps_return_in_sync_with_pickup(self, draft_store, stored_draft):
        draft = await draft_store.restore({"pl": "Gatwick Airport"})

        assert draft.details.return_location == "Gatwick Airport"

    async def test_restore_without_draft(self, draft_store: DraftStore):
        assert await draft_store.restore({"pl": "Gatwick Airport"}) is None


class TestSubmitDetails:
    async def test_saves_new_draft(self, draft_store: DraftStore):
        result = await SubmitDetailsUseCase(draft_store).execute(details_payload())

        assert result.query_params["pickup"] == "2025-03-01"
        assert "vehicle" not in result.query_params
        assert (await draft_store.load()) == result.draft

    async def test_resubmit_keeps_vehicle_and_extras(self, draft_store: DraftStore):
        await draft_store.save(
            BookingDraft(
                details=make_details(),
                selected_vehicle_id="veh-rolls",
                selected_extra_ids=frozenset({"extra-seat"}),
            )
        )

        result = await SubmitDetailsUseCase(draft_store).execute(
            details_payload(pickup_location="Gatwick North Terminal")
        )

        assert result.draft.selected_vehicle_id == "veh-rolls"
        assert result.draft.selected_extra_ids == frozenset({"extra-seat"})
        assert result.draft.details.pickup_location == "Gatwick North Terminal"
        assert "vehicle" not in result.query_params

    async def test_invalid_payload_leaves_storage_untouched(self, draft_store: DraftStore):
        with pytest.raises(DraftValidationError):
            await SubmitDetailsUseCase(draft_store).execute(details_payload(customer_name="A"))

        assert await draft_store.load() is None

    async def test_restore_use_case(self, draft_store: DraftStore, stored_draft: BookingDraft):
        draft = await RestoreDraftUseCase(draft_store).execute({})

        assert draft == stored_draft
