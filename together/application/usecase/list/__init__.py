"""List use cases."""

from together.application.usecase.list.create_list import (
    CreateListRequest,
    CreateListUseCase,
)
from together.application.usecase.list.delete_list import (
    DeleteListRequest,
    DeleteListUseCase,
)
from together.application.usecase.list.get_dashboard import (
    GetDashboardRequest,
    GetDashboardResponse,
    GetDashboardUseCase,
)
from together.application.usecase.list.get_list import (
    GetListRequest,
    GetListResponse,
    GetListUseCase,
)
from together.application.usecase.list.get_members import (
    GetMembersRequest,
    GetMembersResponse,
    GetMembersUseCase,
)
from together.application.usecase.list.get_user_lists import (
    GetUserListsRequest,
    GetUserListsResponse,
    GetUserListsUseCase,
)
from together.application.usecase.list.views import ListItem, MemberItem, TaskItem

__all__ = [
    "CreateListRequest",
    "CreateListUseCase",
    "DeleteListRequest",
    "DeleteListUseCase",
    "GetDashboardRequest",
    "GetDashboardResponse",
    "GetDashboardUseCase",
    "GetListRequest",
    "GetListResponse",
    "GetListUseCase",
    "GetMembersRequest",
    "GetMembersResponse",
    "GetMembersUseCase",
    "GetUserListsRequest",
    "GetUserListsResponse",
    "GetUserListsUseCase",
    "ListItem",
    "MemberItem",
    "TaskItem",
]
