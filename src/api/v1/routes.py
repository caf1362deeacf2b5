"""
API v1 routes.

Administrative REST endpoints over registered customers. Not part of
the registration flow; protected by HTTP BASIC AUTH.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.api.dependencies import get_registration_service, require_admin
from src.api.models import CustomerResponse, ErrorResponse
from src.domain.exceptions import CustomerNotFound, InvalidArgument
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"], dependencies=[Depends(require_admin)])


@router.get(
    "/customers",
    response_model=list[CustomerResponse],
    summary="List all customers",
    description="Returns every registered customer, oldest first. Not paginated.",
)
def list_customers(
    service: RegistrationService = Depends(get_registration_service),
) -> list[CustomerResponse]:
    return [CustomerResponse.model_validate(c) for c in service.list_customers()]


@router.get(
    "/customers/by-email",
    response_model=CustomerResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Blank email"},
        404: {"model": ErrorResponse, "description": "Customer not found"},
    },
    summary="Find a customer by email",
    description="Case-insensitive lookup by email address.",
)
def get_customer_by_email(
    email: str = Query(...),
    service: RegistrationService = Depends(get_registration_service),
) -> CustomerResponse:
    try:
        customer = service.find_by_email(email)
    except InvalidArgument as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerResponse.model_validate(customer)


@router.get(
    "/customers/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse, "description": "Customer not found"}},
    summary="Get a customer by id",
)
def get_customer(
    customer_id: int,
    service: RegistrationService = Depends(get_registration_service),
) -> CustomerResponse:
    customer = service.find_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerResponse.model_validate(customer)


@router.delete(
    "/customers/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Customer not found"}},
    summary="Delete a customer",
    description="Permanently removes the customer record.",
)
def delete_customer(
    customer_id: int,
    service: RegistrationService = Depends(get_registration_service),
) -> Response:
    try:
        service.delete_customer(customer_id)
    except CustomerNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        ) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
