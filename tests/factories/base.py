"""Base factory configuration for polyfactory."""

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.tracker.models.base import new_id, utc_now

__all__ = ["BaseFactory", "new_id", "utc_now"]


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Foreign keys and relationships are never generated: every test wires
    org_id, project_id and task_id explicitly.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
