"""
============================================================
TARJETA CRC — infrastructure/__init__.py
============================================================
Module: infrastructure (adaptadores: PostgreSQL + in-memory)

Policy:
  - Este archivo NO contiene lógica de negocio ni side effects.
  - Importar desde los subpaquetes (db, repositories).
============================================================
"""
