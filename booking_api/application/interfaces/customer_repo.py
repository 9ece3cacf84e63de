"""Interface CustomerRepo - Puerto para repositorio de clientes."""

from abc import ABC, abstractmethod

from booking_api.domain.entities.customer import Customer


class CustomerRepo(ABC):
    """
    Puerto para el repositorio de clientes.

    Los clientes se identifican por email (coincidencia exacta).
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Customer | None:
        """
        Busca un cliente por email.

        Args:
            email: Email tal como lo escribió el cliente.

        Returns:
            Customer o None si no existe.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Customer | None:
        raise NotImplementedError

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """
        Crea un nuevo cliente.

        Returns:
            Customer con el ID asignado.
        """
        raise NotImplementedError
