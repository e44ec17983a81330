"""Base validator classes for CLI input."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """Base class for input validators."""

    @abstractmethod
    def validate(self, value: Any) -> T:
        """Validate input value.

        Args:
            value: Value to validate

        Returns:
            Validated value, possibly transformed

        Raises:
            slugline.exceptions.ValidationError: If validation fails
        """
