"""
Employee API — Persistence Gateway
===================================

What:  The only component that issues statements against the employees table.
How:   One explicit, parameterized statement per operation, each executed in
       its own session and transaction. The gateway keeps no state between
       calls apart from the session factory bound to the engine.
Who:   Constructed by `create_app()`; injected into route handlers through the
       `get_gateway` dependency. Tests pass a SQLite-backed instance or a mock.

Outcome reporting:
    - "no such row" is a value: get() returns None, update()/delete() return 0
    - a failed statement is an exception: StorageError with the driver message

Statements:
    list    SELECT id, fname, lname, age, title FROM employees
    get     SELECT ... WHERE id = :id
    create  INSERT INTO employees (<provided columns>) VALUES (...) RETURNING id
    update  UPDATE employees SET <provided columns> WHERE id = :id
    delete  DELETE FROM employees WHERE id = :id
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from employee_api.exceptions import StorageError
from employee_api.models.employee import Employee as EmployeeRow
from employee_api.schemas.employee import Employee, EmployeeForm

logger = logging.getLogger(__name__)

employees_table = EmployeeRow.__table__

# Failures of a single statement: SQLAlchemy errors, lost sockets, and
# values the driver cannot bind
STORE_ERRORS = (SQLAlchemyError, OSError, OverflowError)

# Returned as the 400 message when an update form sets no columns
EMPTY_UPDATE_MESSAGE = "There are no changes to save. This query cannot be built"


def _driver_message(exc: Exception) -> str:
    """The store's own message for a failed statement, without SQLAlchemy's wrapping."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class EmployeeGateway:
    """
    Executes employee statements on a pooled async engine.

    Every public method checks out a connection for one statement and returns
    it to the pool before returning, so concurrent requests never share a
    session and no transaction spans two calls.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False keeps loaded rows readable after the commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def _fault(self, operation: str, exc: Exception, **context) -> StorageError:
        message = _driver_message(exc)
        logger.error(
            "Employee %s failed: %s", operation, message,
            extra={"operation": operation, **context},
        )
        return StorageError(
            message=message,
            operation=operation,
            context={"error_type": type(exc).__name__, **context},
        )

    async def list(self) -> List[Employee]:
        """All employees, in whatever order the store returns them."""
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(select(EmployeeRow))
                rows = result.scalars().all()
        except STORE_ERRORS as e:
            raise self._fault("list", e) from e

        return [Employee.model_validate(row) for row in rows]

    async def get(self, employee_id: int) -> Optional[Employee]:
        """
        The employee with this primary key, or None when no row matches.

        Raises:
            StorageError: the statement failed, or the key matched several
                          rows (impossible with the primary key in place)
        """
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(
                    select(EmployeeRow).where(EmployeeRow.id == employee_id)
                )
                row = result.scalar_one_or_none()
        except STORE_ERRORS as e:
            raise self._fault("get", e, employee_id=employee_id) from e

        if row is None:
            return None
        return Employee.model_validate(row)

    async def create(self, form: EmployeeForm) -> int:
        """
        Insert the provided fields and return the id the store assigned.

        Any `id` in the form is dropped. Columns the form leaves out are not
        named in the INSERT, so a NOT NULL column without a value makes the
        store reject the row.

        Raises:
            StorageError: the store rejected the row
        """
        values = form.changes()
        statement = insert(employees_table).returning(employees_table.c.id)
        if values:
            statement = statement.values(**values)

        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(statement)
                new_id = result.scalar_one()
        except STORE_ERRORS as e:
            raise self._fault("create", e, columns=sorted(values)) from e

        logger.debug("Inserted employee %s with columns %s", new_id, sorted(values))
        return new_id

    async def update(self, employee_id: int, form: EmployeeForm) -> int:
        """
        Set the provided fields on the row with this id.

        Returns:
            Number of rows matched: 1, or 0 when the id does not exist

        Raises:
            StorageError: the form provides no fields, or the store rejected
                          the new values
        """
        values = form.changes()
        if not values:
            raise StorageError(
                message=EMPTY_UPDATE_MESSAGE,
                operation="update",
                context={"employee_id": employee_id},
            )

        statement = (
            update(employees_table)
            .where(employees_table.c.id == employee_id)
            .values(**values)
        )
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(statement)
                affected = result.rowcount
        except STORE_ERRORS as e:
            raise self._fault("update", e, employee_id=employee_id) from e

        return affected

    async def delete(self, employee_id: int) -> int:
        """Remove the row with this id. Returns the number of rows removed (0 or 1)."""
        statement = delete(employees_table).where(employees_table.c.id == employee_id)
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(statement)
                affected = result.rowcount
        except STORE_ERRORS as e:
            raise self._fault("delete", e, employee_id=employee_id) from e

        return affected

    async def dispose(self) -> None:
        """Close every pooled connection. Called once at application shutdown."""
        await self.engine.dispose()
