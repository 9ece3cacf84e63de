"""
Persistencia del borrador de reserva y su reflejo en la URL.

El borrador se guarda como texto JSON bajo una clave fija. Las fechas se
escriben como ISO-8601 y se convierten de nuevo a ``date`` al leerlas. Al
restaurar, solo las ubicaciones de pickup/return se toman de la URL.
"""

import json
import logging
from datetime import date, datetime
from typing import Any, Mapping

from booking_api.application.interfaces.draft_storage import DraftStorage
from booking_api.domain.constants import DRAFT_SCHEMA_VERSION, DRAFT_STORAGE_KEY
from booking_api.domain.entities.booking_draft import (
    BookingDraft,
    DriverAgeBracket,
    RentalDetails,
)
from booking_api.domain.entities.customer import CustomerType

logger = logging.getLogger(__name__)


class CorruptDraftError(ValueError):
    pass


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise CorruptDraftError(f"Expected ISO date string, got {type(value).__name__}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise CorruptDraftError(f"Invalid ISO date: {value!r}") from exc


def draft_to_dict(draft: BookingDraft) -> dict[str, Any]:
    details = draft.details
    return {
        "schemaVersion": draft.schema_version,
        "pickupLocation": details.pickup_location,
        "returnLocation": details.return_location,
        "sameAsPickup": details.same_as_pickup,
        "pickupDate": details.pickup_date.isoformat(),
        "pickupTime": details.pickup_time,
        "returnDate": details.return_date.isoformat(),
        "returnTime": details.return_time,
        "driverAge": details.driver_age.value,
        "promoCode": details.promo_code,
        "customerName": details.customer_name,
        "customerEmail": details.customer_email,
        "customerPhone": details.customer_phone,
        "customerType": details.customer_type.value,
        "vehicleId": draft.selected_vehicle_id,
        "selectedExtras": sorted(draft.selected_extra_ids),
    }


def draft_from_dict(data: Mapping[str, Any]) -> BookingDraft:
    try:
        details = RentalDetails(
            pickup_location=data["pickupLocation"],
            return_location=data.get("returnLocation") or data["pickupLocation"],
            same_as_pickup=bool(data.get("sameAsPickup", True)),
            pickup_date=_parse_date(data["pickupDate"]),
            pickup_time=data["pickupTime"],
            return_date=_parse_date(data["returnDate"]),
            return_time=data["returnTime"],
            driver_age=DriverAgeBracket(data["driverAge"]),
            promo_code=data.get("promoCode") or None,
            customer_name=data["customerName"],
            customer_email=data["customerEmail"],
            customer_phone=data["customerPhone"],
            customer_type=CustomerType(data["customerType"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptDraftError(str(exc)) from exc

    return BookingDraft(
        details=details,
        selected_vehicle_id=data.get("vehicleId") or None,
        selected_extra_ids=frozenset(data.get("selectedExtras") or ()),
        schema_version=int(data.get("schemaVersion", DRAFT_SCHEMA_VERSION)),
    )


def serialize_draft(draft: BookingDraft) -> bytes:
    return json.dumps(draft_to_dict(draft), separators=(",", ":")).encode("utf-8")


def deserialize_draft(raw: bytes) -> BookingDraft:
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptDraftError(str(exc)) from exc
    if not isinstance(data, dict):
        raise CorruptDraftError("Draft payload is not an object")
    return draft_from_dict(data)


def to_query_params(draft: BookingDraft) -> dict[str, str]:
    """Parámetros de URL que permiten retomar los pasos siguientes desde un enlace."""
    details = draft.details
    params = {
        "pickup": details.pickup_date.isoformat(),
        "pickupTime": details.pickup_time,
        "return": details.return_date.isoformat(),
        "returnTime": details.return_time,
        "pl": details.pickup_location,
        "rl": details.return_location,
        "age": details.driver_age.value,
    }
    if details.promo_code:
        params["promo"] = details.promo_code
    if draft.selected_vehicle_id:
        params["vehicle"] = draft.selected_vehicle_id
    return params


class DraftStore:
    """Lee y escribe el borrador a través de un puerto clave/valor."""

    def __init__(self, storage: DraftStorage, key: str = DRAFT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    async def load(self) -> BookingDraft | None:
        raw = await self._storage.get(self._key)
        if raw is None:
            return None
        try:
            return deserialize_draft(raw)
        except CorruptDraftError as exc:
            logger.warning(
                "Failed to load booking context",
                extra={"storage_key": self._key, "error": str(exc)},
            )
            return None

    async def save(self, draft: BookingDraft) -> None:
        await self._storage.set(self._key, serialize_draft(draft))

    async def restore(self, query: Mapping[str, str]) -> BookingDraft | None:
        """
        Borrador guardado con `pl` / `rl` de la URL aplicados encima.

        El resto de campos sale solo del almacenamiento.
        """
        draft = await self.load()
        if draft is None:
            return None
        pickup_location = query.get("pl") or None
        return_location = query.get("rl") or None
        if pickup_location or return_location:
            draft = draft.with_details(
                draft.details.with_locations(pickup_location, return_location)
            )
        return draft
