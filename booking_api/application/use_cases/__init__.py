"""Casos de uso del asistente de reserva."""

from booking_api.application.use_cases.cancel_rental import CancelRentalUseCase
from booking_api.application.use_cases.confirm_booking import ConfirmBookingUseCase
from booking_api.application.use_cases.create_payment_session import CreatePaymentSessionUseCase
from booking_api.application.use_cases.finalize_checkout import FinalizeCheckoutUseCase
from booking_api.application.use_cases.list_available_vehicles import ListAvailableVehiclesUseCase
from booking_api.application.use_cases.process_follow_ups import ProcessFollowUpsUseCase
from booking_api.application.use_cases.quote_checkout import QuoteCheckoutUseCase
from booking_api.application.use_cases.restore_draft import RestoreDraftUseCase
from booking_api.application.use_cases.select_vehicle import SelectVehicleUseCase
from booking_api.application.use_cases.submit_details import SubmitDetailsUseCase
from booking_api.application.use_cases.toggle_extra import ToggleExtraUseCase

__all__ = [
    "SubmitDetailsUseCase",
    "RestoreDraftUseCase",
    "ListAvailableVehiclesUseCase",
    "SelectVehicleUseCase",
    "ToggleExtraUseCase",
    "QuoteCheckoutUseCase",
    "FinalizeCheckoutUseCase",
    "ProcessFollowUpsUseCase",
    "CancelRentalUseCase",
    "CreatePaymentSessionUseCase",
    "ConfirmBookingUseCase",
]
