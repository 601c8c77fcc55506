"""
Capa de Aplicación - Reservas de salón.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del sistema
- dtos/: Entradas de los casos de uso
- interfaces/: Puertos (repositorio de reservas, reloj)
"""
