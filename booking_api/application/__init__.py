"""
Capa de Aplicación - Asistente de reserva.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del asistente y del checkout
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- schemas.py: Formularios Pydantic de los pasos 1 y 3
- draft_store.py: Serialización y restauración del borrador
- wizard.py: Guardias de entrada de cada paso
"""
