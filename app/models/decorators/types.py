import logging
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

EnumT = TypeVar("EnumT", bound=Enum)


class EnumValueType(TypeDecorator[EnumT]):
    """Stores an Enum by its value (the human-readable label) in a plain string column.

    No database constraint backs the enumeration, so rows written by other tools may hold
    labels this code does not know about.
    """

    impl = String(50)
    cache_ok = True

    def __init__(self, enum_class: type[EnumT], *args: Any, **kwargs: Any):
        self._missing_fails_on_load = kwargs.pop("missing_fails_on_load", True)
        super(EnumValueType, self).__init__(*args, **kwargs)
        self._enum_class = enum_class
        self._logger = logging.getLogger(__name__)

    def process_bind_param(self, value: EnumT | str | None, dialect: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            try:
                value = self._enum_class(value)
            except ValueError:
                self._logger.error(f"Invalid enum value: {value} for {self._enum_class}")
                raise
        return str(value.value)

    def process_result_value(self, value: str | None, dialect: Any) -> EnumT | None:
        if value is None:
            return None
        try:
            return self._enum_class(value)
        except ValueError:
            if self._missing_fails_on_load:
                raise ValueError(f"Invalid enum value: {value} for {self._enum_class}")
            self._logger.warning(f"Invalid enum value: {value} for {self._enum_class}, returning value as is")
            return value  # type: ignore
