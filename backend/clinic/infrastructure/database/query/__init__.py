from .compiler import FieldResolver, compile_where
from .delegate import SQLAlchemyModelDelegate

__all__ = [
    "FieldResolver",
    "compile_where",
    "SQLAlchemyModelDelegate",
]
