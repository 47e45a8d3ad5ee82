# Imports every model so Base.metadata is complete (Alembic autogenerate)
from student_registry.db.base_class import Base  # noqa
from student_registry.models.student import Student  # noqa
