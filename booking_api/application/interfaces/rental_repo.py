"""Interface RentalRepo - Puerto para repositorio de rentas."""

from abc import ABC, abstractmethod

from booking_api.domain.entities.rental import Rental, RentalStatus


class RentalRepo(ABC):
    """Puerto para el repositorio de rentas."""

    @abstractmethod
    async def get_by_id(self, rental_id: str) -> Rental | None:
        raise NotImplementedError

    @abstractmethod
    async def has_active_for_customer(self, customer_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def has_active_for_vehicle(self, vehicle_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def create(self, rental: Rental, exclusive_active: bool = False) -> Rental | None:
        """
        Inserta una renta.

        Args:
            rental: Renta a crear.
            exclusive_active: Si es True, la inserción es condicional: solo
                ocurre si el cliente no tiene otra renta Active.

        Returns:
            Rental con ID asignado, o None si la condición no se cumplió.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_status(self, rental_id: str, status: RentalStatus) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, rental_id: str) -> None:
        raise NotImplementedError
