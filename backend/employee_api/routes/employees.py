"""
Employee API — Employee Route Handlers
=======================================

What:  The five /employees operations.
How:   Each handler gets the EmployeeGateway through `get_gateway`, makes
       exactly one gateway call, and maps the outcome to a status code.
       Path ids use the `int32` convertor, so an id that is not a signed
       32-bit integer matches no route at all and is answered by the
       routing-miss handler.

Outcome mapping:
    GET    /employees        200 {"results": [...]}
    GET    /employees/{id}   200 Employee | 404 empty
    PUT    /employees        201 empty, Location header | 400 {"error": ...}
    POST   /employees/{id}   204 | 400 {"error": ...}
    DELETE /employees/{id}   204 | 404 empty

Storage faults on list/get/delete are not caught here; the global handler
answers them with 500.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from employee_api import convertors  # noqa: F401  registers the int32 path convertor
from employee_api.exceptions import NotFoundError, StorageError, ValidationError
from employee_api.gateway import EmployeeGateway
from employee_api.schemas.employee import (
    Employee,
    EmployeeForm,
    EmployeeList,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_gateway(request: Request) -> EmployeeGateway:
    """Dependency returning the gateway the application was built with."""
    return request.app.state.gateway


@router.get(
    "",
    response_model=EmployeeList,
    responses={500: {"description": "Storage fault", "model": ErrorResponse}},
    summary="List all employees",
)
async def list_employees(
    gateway: EmployeeGateway = Depends(get_gateway),
) -> EmployeeList:
    results = await gateway.list()
    return EmployeeList(results=results)


@router.get(
    "/{employee_id:int32}",
    response_model=Employee,
    responses={
        404: {"description": "No employee with this id (empty body)"},
        500: {"description": "Storage fault", "model": ErrorResponse},
    },
    summary="Get one employee",
)
async def get_employee(
    employee_id: int,
    gateway: EmployeeGateway = Depends(get_gateway),
) -> Employee:
    employee = await gateway.get(employee_id)
    if employee is None:
        raise NotFoundError(resource="employee", resource_id=employee_id)
    return employee


@router.put(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        201: {"description": "Created; Location names the new employee"},
        400: {"description": "Invalid body or rejected row", "model": ErrorResponse},
    },
    summary="Create an employee",
)
async def create_employee(
    form: EmployeeForm,
    gateway: EmployeeGateway = Depends(get_gateway),
) -> Response:
    """
    Insert a new employee from a sparse form.

    Any `id` in the body is ignored; the store assigns one. Missing required
    fields are reported by the store and returned as a 400 with its message.
    """
    try:
        new_id = await gateway.create(form)
    except StorageError as e:
        raise ValidationError(message=e.message, context=e.context) from e

    logger.info("Created employee %s", new_id)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"{router.prefix}/{new_id}"},
    )


@router.post(
    "/{employee_id:int32}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid body or rejected update", "model": ErrorResponse},
    },
    summary="Partially update an employee",
)
async def update_employee(
    employee_id: int,
    form: EmployeeForm,
    gateway: EmployeeGateway = Depends(get_gateway),
) -> Response:
    """
    Overwrite the fields present in the body; leave every other column alone.

    Answers 204 whether or not a row with this id exists.
    """
    try:
        affected = await gateway.update(employee_id, form)
    except StorageError as e:
        raise ValidationError(message=e.message, context=e.context) from e

    if affected:
        logger.info("Updated employee %s: %s", employee_id, sorted(form.changes()))
    else:
        # TODO: answer 404 here once clients no longer rely on blind updates
        logger.info("Update matched no employee with id %s", employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{employee_id:int32}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"description": "No employee with this id (empty body)"},
        500: {"description": "Storage fault", "model": ErrorResponse},
    },
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: int,
    gateway: EmployeeGateway = Depends(get_gateway),
) -> Response:
    deleted = await gateway.delete(employee_id)
    if deleted < 1:
        raise NotFoundError(resource="employee", resource_id=employee_id)

    logger.info("Deleted employee %s", employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
