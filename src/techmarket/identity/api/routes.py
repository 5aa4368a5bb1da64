"""FastAPI routes for users."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from techmarket.identity.api.schemas import RegisterUserRequest, UserEnvelope, UserResponse
from techmarket.identity.user.registration import DeleteUser, RegisterUser
from techmarket.identity.user.user import User
from techmarket.schemas import MessageResponse

user_router = APIRouter(prefix="/users", tags=["users"])


def user_response(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_active=user.is_active,
        created_at=user.created_at,
    )


@user_router.post("", status_code=201, response_model=UserEnvelope)
async def register_user(body: RegisterUserRequest) -> UserEnvelope:
    command = RegisterUser(
        username=body.username,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return UserEnvelope(message="User created successfully", user=user_response(user))


@user_router.get("", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    return [user_response(u) for u in current_domain.repository_for(User).list_all()]


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return user_response(current_domain.repository_for(User).get(user_id))


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User deleted successfully")
