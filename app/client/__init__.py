"""Client side of the users API: HTTP client and list view-model."""

from app.client.sorting import SortOption, SortState
from app.client.user_list import UserListView
from app.client.users_api import UsersApiClient, UsersApiError

__all__ = ["SortOption", "SortState", "UserListView", "UsersApiClient", "UsersApiError"]
