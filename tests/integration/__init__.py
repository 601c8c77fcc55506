"""
Integration tests package.

Tests de integración del repositorio SQL contra SQLite in-memory (aiosqlite):
- Mapeo de filas a variantes de reserva
- Chequeo de conflictos de franja por staff
- Transiciones con control de versión (lock_version)
- Restricciones CHECK traducidas a ConstraintViolation

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
