"""
Capa de Infraestructura - Asistente de reserva.

Implementaciones concretas de los puertos.

Estructura:
- db/: Tablas, repositorios SQL y transacciones (SQLAlchemy async)
- gateways/: Pasarela de pago (Stripe)
- in_memory/: Implementaciones en memoria para desarrollo y testing
- circuit_breaker.py: Circuit breaker del proveedor de pago
"""
