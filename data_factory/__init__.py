"""Pipeline de sincronización de propiedades hacia el store de analítica."""
