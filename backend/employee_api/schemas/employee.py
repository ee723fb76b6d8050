"""
Employee API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the JSON contract of the /employees routes.
How:   FastAPI validates request bodies against EmployeeForm and serializes
       Employee / EmployeeList responses. Error envelopes are declared here so
       they show up in the OpenAPI document when docs are enabled.

Wire shapes:
    Employee        {"id": int, "fname": str, "lname": str, "age": int, "title": str}
    EmployeeList    {"results": [Employee, ...]}
    ErrorResponse   {"error": "<message>"}      handler-level failures (400, 500)
    NotFoundResponse {"message": "not found"}   routing misses
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from employee_api.convertors import INT32_MAX, INT32_MIN

# The integer columns hold signed 32-bit values
Int32 = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX)]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Employee(BaseModel):
    """A stored employee. Returned by GET /employees/{id} and inside EmployeeList."""
    id: int = Field(description="Store-assigned primary key")
    fname: str = Field(description="First name")
    lname: str = Field(description="Last name")
    age: int = Field(description="Age in years")
    title: str = Field(description="Job title")

    model_config = ConfigDict(from_attributes=True)


class EmployeeList(BaseModel):
    """
    Envelope for GET /employees.

    Order is whatever the store returns; no sort is applied.
    """
    results: List[Employee] = Field(description="Every stored employee")


class ErrorResponse(BaseModel):
    """Handler-level error envelope, carrying the store or parser message."""
    error: str = Field(description="Underlying error message")


class NotFoundResponse(BaseModel):
    """Envelope returned when no route matches the request."""
    message: str = Field(default="not found")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeForm(BaseModel):
    """
    Sparse employee payload for PUT /employees and POST /employees/{id}.

    Every field is optional. A key that is absent and a key sent as null both
    mean "not provided": neither produces a column assignment, so there is no
    way to null out a column through this form. `id` is accepted but never
    written.

    Types are strict: "31" is not an integer and 42 is not a string.
    Integers must fit in 32 bits.
    """
    id: Optional[Int32] = None
    fname: Optional[StrictStr] = None
    lname: Optional[StrictStr] = None
    age: Optional[Int32] = None
    title: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")

    def changes(self) -> Dict[str, Any]:
        """
        Column assignments for the fields that were provided.

        Example:
            EmployeeForm(id=9, age=31, title=None).changes() == {"age": 31}
        """
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)
