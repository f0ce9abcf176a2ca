import logging
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

EnumT = TypeVar("EnumT", bound=Enum)

logger = logging.getLogger(__name__)


class EnumStringType(TypeDecorator[EnumT]):
    """Stores an enum member by name in a VARCHAR column."""

    impl = String(50)
    cache_ok = True

    def __init__(self, enum_class: type[EnumT], *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._enum_class = enum_class

    def process_bind_param(self, value: EnumT | str | None, dialect: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            # Accept both member names and member values, e.g. from test factories.
            try:
                return self._enum_class[value].name
            except KeyError:
                try:
                    return self._enum_class(value).name
                except ValueError:
                    raise ValueError(f"Invalid enum value: {value} for {self._enum_class}")
        return value.name

    def process_result_value(self, name: str | None, dialect: Any) -> EnumT | None:
        if name is None:
            return None
        try:
            return self._enum_class[name]
        except KeyError:
            logger.error(f"Invalid enum value loaded: {name} for {self._enum_class}")
            raise ValueError(f"Invalid enum value: {name} for {self._enum_class}")
