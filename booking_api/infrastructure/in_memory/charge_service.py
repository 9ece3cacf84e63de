from booking_api.application.interfaces.charge_service import ChargeService


class InMemoryChargeService(ChargeService):
    def __init__(self) -> None:
        self.generated: list[str] = []

    async def generate_first_charge(self, rental_id: str) -> None:
        if rental_id not in self.generated:
            self.generated.append(rental_id)
