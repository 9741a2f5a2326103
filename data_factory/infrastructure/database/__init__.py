"""
Configuración de base de datos.

Importa todos los modelos para que se registren con sus Base
antes de crear las tablas.
"""
from data_factory.infrastructure.database.models import (
    PropertyModel,
    DevPropertyModel
)
