from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.repositories import UserRepository
from ....application.dto import Page, UserDTO
from ....application.exceptions import DuplicateResourceError, ResourceNotFoundError
from ....application.user_service import UserService
from ..schemas import UserIn, UserOut, UserPageOut

router = APIRouter(prefix="/users", tags=["Users"])

NOT_FOUND = {404: {"description": "User not found"}}
INVALID = {400: {"description": "Invalid input"}}
DUPLICATE = {409: {"description": "User with this email already exists"}}

# BIGINT в БД; большие значения отсекаются валидацией (400), а не драйвером
MIN_ID, MAX_ID = -(2**63), 2**63 - 1
MAX_PAGE_SIZE = 100
UserId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID)]


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(repo=UserRepository(db))


def _to_dto(payload: UserIn) -> UserDTO:
    return UserDTO(
        id=None,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        phone=payload.phone,
        address=payload.address,
    )


def _to_page(page: Page[UserDTO]) -> UserPageOut:
    return UserPageOut(
        content=[UserOut.model_validate(u) for u in page.items],
        number=page.page,
        size=page.size,
        total_elements=page.total,
        total_pages=page.total_pages,
        number_of_elements=len(page.items),
        first=page.is_first,
        last=page.is_last,
        empty=not page.items,
    )


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED,
             summary="Create a new user", responses={**INVALID, **DUPLICATE})
def create_user(payload: UserIn, service: UserService = Depends(get_user_service)):
    try:
        return service.create_user(_to_dto(payload))
    except DuplicateResourceError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=list[UserOut], summary="Get all users")
def list_users(service: UserService = Depends(get_user_service)):
    return service.get_all_users()


# объявлен до /{user_id}, иначе "page" уйдёт в path-параметр
@router.get("/page", response_model=UserPageOut, summary="Get users with pagination",
            responses=INVALID)
def list_users_paged(page: int = Query(0, ge=0, le=MAX_ID // MAX_PAGE_SIZE),
                     size: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
                     service: UserService = Depends(get_user_service)):
    return _to_page(service.get_all_users_paged(page, size))


@router.get("/email/{email}", response_model=UserOut, summary="Get user by email",
            responses=NOT_FOUND)
def get_user_by_email(email: str, service: UserService = Depends(get_user_service)):
    try:
        return service.get_user_by_email(email)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{user_id}", response_model=UserOut, summary="Get user by ID",
            responses=NOT_FOUND)
def get_user(user_id: UserId, service: UserService = Depends(get_user_service)):
    try:
        return service.get_user_by_id(user_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{user_id}", response_model=UserOut, summary="Update user",
            responses={**INVALID, **NOT_FOUND, 409: {"description": "Email already exists for another user"}})
def update_user(user_id: UserId, payload: UserIn, service: UserService = Depends(get_user_service)):
    try:
        return service.update_user(user_id, _to_dto(payload))
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateResourceError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete user",
               responses=NOT_FOUND)
def delete_user(user_id: UserId, service: UserService = Depends(get_user_service)):
    try:
        service.delete_user_by_id(user_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
