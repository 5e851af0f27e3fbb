from typing import Any

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the mapped Veeam tables.

    The schema is owned by Veeam; the mappings are used for reading only.
    """

    type_annotation_map: dict[type, Any] = {}
