from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for every table in db_models.

    Kept free of engine/session imports so Alembic and the sync seed script
    can load the metadata without the async driver.
    """
    pass
