"""
Dependency injection for the todo bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the todo context. Long-lived
collaborators (engine, hasher, token service) are built once by
create_app() and read from app.state.
"""

from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Engine

from todo_api.application.todo.authenticate_request import AuthenticateRequestUseCase
from todo_api.application.todo.complete_task import CompleteTaskUseCase
from todo_api.application.todo.create_task import CreateTaskUseCase
from todo_api.application.todo.delete_task import DeleteTaskUseCase
from todo_api.application.todo.get_task import GetTaskUseCase
from todo_api.application.todo.get_user_profile import GetUserProfileUseCase
from todo_api.application.todo.list_tasks import ListTasksUseCase
from todo_api.application.todo.list_users import ListUsersUseCase
from todo_api.application.todo.login_user import LoginUserUseCase
from todo_api.application.todo.register_user import RegisterUserUseCase
from todo_api.application.todo.update_task import UpdateTaskUseCase
from todo_api.domain.todo.ports import (
    PasswordHasher,
    TaskRepository,
    TokenService,
    UserRepository,
)
from todo_api.infrastructure.todo.task_repository import SqlTaskRepository
from todo_api.infrastructure.todo.user_repository import SqlUserRepository
from todo_api.interfaces.todo.context import RequestContext

# Declares the bearer scheme in the OpenAPI document; the header itself
# is checked by AuthenticateRequestUseCase.
bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by register/login")


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_repository(engine: Engine = Depends(get_engine)) -> UserRepository:
    return SqlUserRepository(engine=engine)


def get_task_repository(engine: Engine = Depends(get_engine)) -> TaskRepository:
    return SqlTaskRepository(engine=engine)


def get_authenticate_request_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    token_service: TokenService = Depends(get_token_service),
) -> AuthenticateRequestUseCase:
    return AuthenticateRequestUseCase(user_repo=user_repo, token_service=token_service)


def get_authenticated_context(
    request: Request,
    use_case: AuthenticateRequestUseCase = Depends(get_authenticate_request_use_case),
    _credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> RequestContext:
    """Authentication gate: resolve the acting user or fail with 401."""
    user = use_case.execute(request.headers.get("Authorization"))
    return RequestContext(user=user)


def get_register_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> RegisterUserUseCase:
    """Build RegisterUserUseCase with its infrastructure dependencies."""
    return RegisterUserUseCase(
        user_repo=user_repo,
        password_hasher=password_hasher,
        token_service=token_service,
    )


def get_login_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> LoginUserUseCase:
    """Build LoginUserUseCase with its infrastructure dependencies."""
    return LoginUserUseCase(
        user_repo=user_repo,
        password_hasher=password_hasher,
        token_service=token_service,
    )


def get_user_profile_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> GetUserProfileUseCase:
    return GetUserProfileUseCase(user_repo=user_repo)


def get_list_users_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> ListUsersUseCase:
    return ListUsersUseCase(user_repo=user_repo)


def get_create_task_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CreateTaskUseCase:
    """Build CreateTaskUseCase with its infrastructure dependencies."""
    return CreateTaskUseCase(task_repo=task_repo, user_repo=user_repo)


def get_list_tasks_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
) -> ListTasksUseCase:
    return ListTasksUseCase(task_repo=task_repo)


def get_task_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
) -> GetTaskUseCase:
    return GetTaskUseCase(task_repo=task_repo)


def get_update_task_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UpdateTaskUseCase:
    """Build UpdateTaskUseCase with its infrastructure dependencies."""
    return UpdateTaskUseCase(task_repo=task_repo, user_repo=user_repo)


def get_delete_task_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
) -> DeleteTaskUseCase:
    return DeleteTaskUseCase(task_repo=task_repo)


def get_complete_task_use_case(
    task_repo: TaskRepository = Depends(get_task_repository),
) -> CompleteTaskUseCase:
    return CompleteTaskUseCase(task_repo=task_repo)
