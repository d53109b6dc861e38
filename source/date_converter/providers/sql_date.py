"""This module converts between calendar dates and database date values.

A database date is represented as a SQLAlchemy bind parameter typed as
`sqlalchemy.Date`. It can be embedded in any statement, for example
`select(table).where(table.c.due == value)`, and every dialect binds it as a
DATE. Rows fetched through a driver carry plain `datetime.date` values, or
`datetime.datetime` values for timestamp columns, so both are accepted when
reading a database date back.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, literal
from sqlalchemy.sql.expression import BindParameter


class SQLDateProvider:
    """Builds and reads database date values."""

    @staticmethod
    def to_sql_date(value: date) -> BindParameter[date]:
        """Wraps a date into a database date value.

        Args:
            value: The calendar date.

        Returns:
            A bind parameter typed as a SQL DATE.
        """
        return literal(value, Date())

    @staticmethod
    def is_sql_date(value: object) -> bool:
        """Checks whether a value is a database date this provider can read.

        Args:
            value: Any value.

        Returns:
            True for DATE-typed bind parameters and driver date values.
        """
        if isinstance(value, BindParameter):
            return isinstance(value.type, Date)
        return isinstance(value, date)

    @staticmethod
    def from_sql_date(value: BindParameter[date] | datetime | date) -> date:
        """Extracts the calendar date held by a database date value.

        Args:
            value: A DATE-typed bind parameter, or a value fetched by a driver.

        Returns:
            The calendar date, without any time component.

        Raises:
            TypeError: If the value is not a database date.
        """
        if isinstance(value, BindParameter):
            if not isinstance(value.type, Date):
                raise TypeError(f"Bind parameter must be of type Date, got {value.type!r}")
            value = value.effective_value

        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        raise TypeError(f"Expected a database date, got {type(value).__name__}")
