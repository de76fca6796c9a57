"""
FastAPI router for users: registration, login and profiles.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, status

from todo_api.application.todo.dtos import (
    GetUserProfileQuery,
    LoginCommand,
    RegisterUserCommand,
)
from todo_api.application.todo.get_user_profile import GetUserProfileUseCase
from todo_api.application.todo.list_users import ListUsersUseCase
from todo_api.application.todo.login_user import LoginUserUseCase
from todo_api.application.todo.register_user import RegisterUserUseCase
from todo_api.interfaces.todo.context import RequestContext
from todo_api.interfaces.todo.dependencies import (
    get_authenticated_context,
    get_list_users_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_user_profile_use_case,
)
from todo_api.interfaces.todo.schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterUserRequest,
    UserItem,
    UserListResponse,
    UserProfileResponse,
    UserSummaryItem,
)

router = APIRouter(prefix="/api/users", tags=["users"])

UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"}}


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid data or email already registered"}},
    summary="Register a user",
    description="Create an account and receive a bearer token valid for 30 days.",
)
def register_user(
    request: RegisterUserRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> AuthResponse:
    """Register a new user."""
    result = use_case.execute(
        RegisterUserCommand(
            username=request.username,
            email=request.email,
            password=request.password,
        )
    )
    return AuthResponse(user=UserSummaryItem.from_result(result.user), token=result.token)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid email or password"}},
    summary="Log in",
    description="Exchange email and password for a bearer token.",
)
def login_user(
    request: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
) -> AuthResponse:
    """Authenticate a user and return a token."""
    result = use_case.execute(LoginCommand(email=request.email, password=request.password))
    return AuthResponse(user=UserSummaryItem.from_result(result.user), token=result.token)


@router.get(
    "/profile",
    response_model=UserProfileResponse,
    responses={**UNAUTHORIZED, 404: {"model": ErrorResponse}},
    summary="Get own profile",
    description="Return the profile of the authenticated user.",
)
def get_user_profile(
    context: RequestContext = Depends(get_authenticated_context),
    use_case: GetUserProfileUseCase = Depends(get_user_profile_use_case),
) -> UserProfileResponse:
    """Return the authenticated user's profile."""
    result = use_case.execute(GetUserProfileQuery(user_id=context.user_id))
    return UserProfileResponse(user=UserItem.from_result(result))


@router.get(
    "",
    response_model=UserListResponse,
    responses=UNAUTHORIZED,
    summary="List users",
    description="Return every registered user, newest first. Passwords are never included.",
)
def list_users(
    _context: RequestContext = Depends(get_authenticated_context),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> UserListResponse:
    """List all users."""
    results = use_case.execute()
    return UserListResponse(
        count=len(results),
        users=[UserItem.from_result(r) for r in results],
    )
