"""
Module ORM Registry (``hr_modules._orm_registry``).

Responsibility
--------------
Ensure all module-level SQLAlchemy ORM models are imported so that
``Base.metadata`` contains their table definitions before tables are
created by ``hr_kernel.db.engine.create_tables()``.

Architecture position
---------------------
**Modules layer** -- utility.  Imported lazily by the kernel engine
module; nothing else in the kernel may import ``hr_modules``.
"""


def import_all_orm_models() -> None:
    """Import every ``hr_modules.*.orm`` module to register ORM models.

    This function is idempotent -- repeated calls are harmless.
    """
    import hr_modules.salary.orm  # noqa: F401
    import hr_modules.training.orm  # noqa: F401
    import hr_modules.uniforms.orm  # noqa: F401
