from app.core.user_scoped_service import UserScopedService


class EventService(UserScopedService):
    table_name = "events"
    label = "event"
    label_plural = "events"
    order_by = "date"
    order_desc = False
