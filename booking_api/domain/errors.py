"""Excepciones de dominio para el flujo de reservas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class DraftValidationError(DomainError):
    """Uno o más campos del formulario no son válidos."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            message="Please fill in all required fields correctly",
            code="VALIDATION_ERROR",
        )
        self.errors = errors


class InvalidRangeError(DomainError):
    """El rango de renta no produce un número positivo de días."""

    def __init__(self, days: int):
        super().__init__(
            message=f"Return must be after pickup (got {days} rental days)",
            code="INVALID_RANGE",
        )
        self.days = days


class MissingRateError(DomainError):
    """El vehículo no tiene la tarifa requerida por el tramo."""

    def __init__(self, vehicle_id: str, tier: str):
        super().__init__(
            message=f"Vehicle {vehicle_id} has no {tier} rate configured",
            code="MISSING_RATE",
        )
        self.vehicle_id = vehicle_id
        self.tier = tier


# === Errores de Precondición ===


class MissingUpstreamStateError(DomainError):
    """Faltan datos de un paso anterior del asistente."""

    def __init__(self, notice: str, missing: list[str], redirect_to: str):
        super().__init__(message=notice, code="MISSING_UPSTREAM_STATE")
        self.missing = missing
        self.redirect_to = redirect_to


class DraftNotFoundError(DomainError):
    """No hay borrador guardado para esta sesión."""

    def __init__(self, redirect_to: str):
        super().__init__(
            message="Customer information not found. Please restart booking.",
            code="DRAFT_NOT_FOUND",
        )
        self.redirect_to = redirect_to


class ActiveRentalExistsError(DomainError):
    """Un cliente Individual ya tiene una renta activa."""

    def __init__(self, customer_id: str):
        super().__init__(
            message=(
                "You already have an active rental. "
                "Individuals can only have one active rental at a time."
            ),
            code="ACTIVE_RENTAL_EXISTS",
        )
        self.customer_id = customer_id


class VehicleNotFoundError(DomainError):
    """El vehículo no existe."""

    def __init__(self, vehicle_id: str):
        super().__init__(
            message=f"Vehicle not found: {vehicle_id}",
            code="VEHICLE_NOT_FOUND",
        )
        self.vehicle_id = vehicle_id


class VehicleUnavailableError(DomainError):
    """El vehículo no está disponible para renta."""

    def __init__(self, vehicle_id: str, current_status: str):
        super().__init__(
            message=f"Vehicle {vehicle_id} is not available (status '{current_status}')",
            code="VEHICLE_UNAVAILABLE",
        )
        self.vehicle_id = vehicle_id
        self.current_status = current_status


class RentalNotFoundError(DomainError):
    """La renta no existe."""

    def __init__(self, rental_id: str):
        super().__init__(
            message=f"Rental not found: {rental_id}",
            code="RENTAL_NOT_FOUND",
        )
        self.rental_id = rental_id


class ExtraNotFoundError(DomainError):
    """El extra no existe o no está activo."""

    def __init__(self, extra_id: str):
        super().__init__(
            message=f"Extra not found: {extra_id}",
            code="EXTRA_NOT_FOUND",
        )
        self.extra_id = extra_id


# === Errores de Pago ===


class PaymentSessionError(DomainError):
    """No se pudo crear o confirmar la sesión de pago."""

    def __init__(self, message: str, status_code: int = 400, code: str = "PAYMENT_ERROR"):
        super().__init__(message=message, code=code)
        self.status_code = status_code
