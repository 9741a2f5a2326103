"""
Modelos de base de datos (ORM).
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from data_factory.infrastructure.database.session import SourceBase, AnalyticsBase


class PropertyModel(SourceBase):
    """
    Propiedad en el store origen (source of record).

    El job solo la lee. tenant_id es nullable y queda reservado
    para filtrar extracciones multi-tenant.
    """

    __tablename__ = "properties"

    id = Column(String(255), primary_key=True)
    county_name = Column(String(255), nullable=True)
    parcel_id = Column(String(255), nullable=True)
    tenant_id = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Property(id={self.id}, county={self.county_name}, parcel={self.parcel_id})>"


class DevPropertyModel(AnalyticsBase):
    """
    Copia de propiedades en el store de analítica.

    Se reemplaza completa en cada upsert por id.
    """

    __tablename__ = "dev_properties"

    id = Column(String(255), primary_key=True)
    county_name = Column(String(255), nullable=True)
    parcel_id = Column(String(255), nullable=True)
    updated_at = Column(String(64), nullable=False)

    def __repr__(self):
        return f"<DevProperty(id={self.id}, updated_at={self.updated_at})>"
