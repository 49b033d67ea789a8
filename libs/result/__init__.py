"""Result type for use case outcomes

Use cases return Result instead of raising for business errors.
Callers check is_ok()/is_err() and read value or error.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Error(BaseModel):
    """Business error carried by a failed Result"""

    code: str
    message: str
    reason: Optional[str] = None
    details: Optional[List[Dict[str, Any]]] = None


class Result(Generic[T]):
    """Either a value (ok) or an Error (err)"""

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self.value = value
        self.error = error

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result(error={self.error.code!r})"
        return f"Result(value={self.value!r})"


class Return:
    """Factory helpers for building Results"""

    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)


__all__ = ["Result", "Return", "Error"]
