"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso del catálogo (usecases/) y utilidades de arranque
(dev_seed_admin). Sin dependencias a FastAPI ni a SQL.
===============================================================================
"""
