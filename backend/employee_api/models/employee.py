"""
Employee API — Employee SQLAlchemy Model
=========================================

What:  ORM mapping of the `employees` table.
Who:   Used by EmployeeGateway to build select/insert/update/delete statements,
       and by `create_tables()` to bootstrap the schema.

Table Design:
    - id: integer primary key assigned by the store on insert; never updated
    - fname, lname, title: free-form strings
    - age: integer
    All non-id columns are NOT NULL, so a create payload that omits one is
    rejected by the store itself.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.database import Base


class Employee(Base):
    """A persisted employee row."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    fname: Mapped[str] = mapped_column(String, nullable=False)
    lname: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, fname='{self.fname}', lname='{self.lname}')>"
