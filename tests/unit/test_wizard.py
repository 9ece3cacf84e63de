"""Guardias de entrada de cada paso del asistente."""

from datetime import date

import pytest

from booking_api.application.wizard import (
    ENTRY_NOTICES,
    missing_params,
    require_step,
    with_vehicle,
)
from booking_api.domain.constants import BOOKING_ENTRY_PATH
from booking_api.domain.entities import WizardStep
from booking_api.domain.errors import MissingUpstreamStateError

STEP_TWO_QUERY = {
    "pickup": "2025-03-01",
    "pickupTime": "10:00",
    "return": "2025-04-05",
    "returnTime": "10:00",
    "pl": "London Heathrow Terminal 5",
    "rl": "London Heathrow Terminal 5",
    "age": "25_70",
}


class TestMissingParams:
    def test_vehicle_selection_needs_dates(self):
        assert missing_params(WizardStep.VEHICLE_SELECTION, {}) == ["pickup", "return"]

    def test_checkout_needs_vehicle(self):
        assert missing_params(WizardStep.CHECKOUT, STEP_TWO_QUERY) == ["vehicle"]

    def test_unparsable_date_counts_as_missing(self):
        query = {**STEP_TWO_QUERY, "return": "next-month"}

        assert missing_params(WizardStep.VEHICLE_SELECTION, query) == ["return"]

    def test_complete_query(self):
        assert missing_params(WizardStep.VEHICLE_SELECTION, STEP_TWO_QUERY) == []


class TestRequireStep:
    def test_vehicle_selection_context(self):
        context = require_step(WizardStep.VEHICLE_SELECTION, STEP_TWO_QUERY)

        assert context.pickup_date == date(2025, 3, 1)
        assert context.return_date == date(2025, 4, 5)
        assert context.rental_days == 35
        assert context.vehicle_id is None

    def test_checkout_context_carries_vehicle(self):
        context = require_step(WizardStep.CHECKOUT, {**STEP_TWO_QUERY, "vehicle": "veh-rolls"})

        assert context.vehicle_id == "veh-rolls"

    def test_redirects_to_details_when_dates_missing(self):
        with pytest.raises(MissingUpstreamStateError) as exc_info:
            require_step(WizardStep.VEHICLE_SELECTION, {"pl": "Heathrow"})

        error = exc_info.value
        assert error.message == ENTRY_NOTICES[WizardStep.VEHICLE_SELECTION]
        assert error.redirect_to == BOOKING_ENTRY_PATH
        assert error.missing == ["pickup", "return"]

    def test_checkout_without_vehicle_redirects(self):
        with pytest.raises(MissingUpstreamStateError) as exc_info:
            require_step(WizardStep.CHECKOUT, STEP_TWO_QUERY)

        assert exc_info.value.message == "Missing booking details. Redirecting..."
        assert exc_info.value.missing == ["vehicle"]

    def test_details_step_has_no_guard(self):
        with pytest.raises(ValueError):
            require_step(WizardStep.DETAILS, {})

    def test_timestamp_dates_are_accepted(self):
        query = {"pickup": "2025-03-01T00:00:00.000Z", "return": "2025-04-05T00:00:00.000Z"}

        assert require_step(WizardStep.VEHICLE_SELECTION, query).rental_days == 35


def test_with_vehicle_keeps_existing_params():
    params = with_vehicle(STEP_TWO_QUERY, "veh-rolls")

    assert params == {**STEP_TWO_QUERY, "vehicle": "veh-rolls"}
    assert "vehicle" not in STEP_TWO_QUERY
