from shop.services.users.dto import NewUser, UpdateUser, UserInfo
from shop.services.users.service import UserService

__all__ = ["NewUser", "UpdateUser", "UserInfo", "UserService"]
