class ChargeService:
    """Procedimiento que genera el cargo del primer mes de una renta."""

    async def generate_first_charge(self, rental_id: str) -> None:
        raise NotImplementedError
