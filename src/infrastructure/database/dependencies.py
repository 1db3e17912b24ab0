"""FastAPI dependency injection for the document store.

The ``Database`` alias injects the configured database into route
dependencies without repeating ``Depends()``. Tests override
``get_database`` to swap in an in-memory double.
"""

from typing import Annotated

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from src.infrastructure.database.client import Document, get_database

Database = Annotated[AsyncDatabase[Document], Depends(get_database)]
