from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from shopper_api.schemas import ErrorResponse, Shopper, ShopperIn, ShoppersResponse
from shopper_api.services.shopper_service import (
    InvalidShopperError,
    ShopperAlreadyExistsError,
    ShopperNotFoundError,
    ShopperService,
    ShopperStorageError,
)

router = APIRouter(prefix="/shoppers", tags=["shoppers"])

NOT_FOUND = "shopper not found"
CREATE_FAILED = "failed to create shopper"

_error_responses = {
    400: {"model": ErrorResponse, "description": "Invalid request payload"},
    404: {"model": ErrorResponse, "description": "Shopper not found"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}


def _responses(*codes: int) -> dict:
    return {code: _error_responses[code] for code in codes}


def get_shopper_service(request: Request) -> ShopperService:
    svc = getattr(getattr(request.app, "state", None), "shopper_service", None)
    if not svc:
        raise RuntimeError("ShopperService not configured")
    return svc


@router.post(
    "",
    response_model=Shopper,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new shopper",
    description="Create a new shopper with the provided data. dateJoined is set to today's date.",
    responses=_responses(400, 500),
)
def create_shopper(payload: ShopperIn, svc: ShopperService = Depends(get_shopper_service)):
    try:
        return svc.create(payload)
    except InvalidShopperError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc))
    except (ShopperAlreadyExistsError, ShopperStorageError):
        # a primary-key clash is a storage constraint failure
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, CREATE_FAILED)


@router.get(
    "",
    response_model=ShoppersResponse,
    summary="Get all shoppers",
    description="Retrieve a list of all shoppers.",
    responses=_responses(500),
)
def list_shoppers(svc: ShopperService = Depends(get_shopper_service)):
    try:
        return ShoppersResponse(shoppers=svc.list_all())
    except ShopperStorageError:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "could not fetch shoppers")


@router.get(
    "/{username}",
    response_model=Shopper,
    summary="Get shopper by username",
    description="Retrieve a shopper by their username.",
    responses=_responses(404, 500),
)
def get_shopper(username: str, svc: ShopperService = Depends(get_shopper_service)):
    try:
        return svc.get(username)
    except ShopperNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except ShopperStorageError as exc:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@router.put(
    "/{username}",
    response_model=Shopper,
    summary="Update shopper by username",
    description=(
        "Replace a shopper's information. Every field except username and "
        "dateJoined is overwritten; omitted fields are cleared."
    ),
    responses=_responses(400, 404, 500),
)
def update_shopper(
    username: str,
    payload: ShopperIn,
    svc: ShopperService = Depends(get_shopper_service),
):
    try:
        return svc.update(username, payload)
    except ShopperNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except ShopperStorageError as exc:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@router.delete(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete shopper by username",
    description="Delete a shopper by their username.",
    responses=_responses(404, 500),
)
def delete_shopper(username: str, svc: ShopperService = Depends(get_shopper_service)):
    try:
        svc.delete(username)
    except ShopperNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except ShopperStorageError as exc:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
