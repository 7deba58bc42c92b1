from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from schemas import UserSchema
from store import DuplicateEmailError, UserStore, get_store

router = APIRouter()

USER_EXISTS = "User already exists"
USER_NOT_FOUND = "User not found"

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def user_body(request: Request) -> UserSchema:
    """Read a user body sent either as JSON or as an HTML form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_TYPES):
        payload = dict(await request.form())
    else:
        try:
            payload = await request.json()
        except ValueError:
            payload = None

    try:
        return UserSchema.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
        )


@router.post("/signin", status_code=201)
def create_user(data: UserSchema = Depends(user_body), store: UserStore = Depends(get_store)):
    if store.find_unique(email=data.email):
        raise HTTPException(status_code=400, detail=USER_EXISTS)

    try:
        user = store.create(name=data.name, email=data.email, password=data.password)
    except DuplicateEmailError:
        # Lost the race against a concurrent signin for the same email
        raise HTTPException(status_code=400, detail=USER_EXISTS)

    return {"message": "User created successfully", "user": user}


@router.get("/users")
def get_all_users(store: UserStore = Depends(get_store)):
    return store.find_many()


@router.get("/user/{user_id}")
def get_user(user_id: int, store: UserStore = Depends(get_store)):
    user = store.find_unique(id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    return user


@router.put("/user/update/{user_id}")
def update_user(user_id: int, data: UserSchema = Depends(user_body), store: UserStore = Depends(get_store)):
    """
    Replace name, email and password of an existing user.

    The email is not re-checked up front; a collision with another user is
    caught by the unique constraint and reported as a conflict.
    """
    user = store.find_unique(id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)

    try:
        user = store.update(user, name=data.name, email=data.email, password=data.password)
    except DuplicateEmailError:
        raise HTTPException(status_code=400, detail=USER_EXISTS)

    return {"message": "User updated successfully", "user": user}


@router.delete("/user/delete/{user_id}")
def delete_user(user_id: int, store: UserStore = Depends(get_store)):
    user = store.find_unique(id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)

    store.delete(user)
    return {"message": "User deleted successfully"}
