"""Infrastructure layer — database engine, schema, migrations, settings store.

This layer depends on stdlib, the domain models, and third-party libs
(SQLAlchemy, Alembic). It must never import from services, commands, or output.
"""
