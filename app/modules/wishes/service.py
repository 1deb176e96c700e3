from app.core.user_scoped_service import UserScopedService


class WishService(UserScopedService):
    table_name = "wishes"
    label = "wish"
    label_plural = "wishes"
