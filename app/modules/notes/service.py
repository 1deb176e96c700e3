from app.core.user_scoped_service import UserScopedService


class NoteService(UserScopedService):
    table_name = "notes"
    label = "note"
    label_plural = "notes"
    # Most recently edited first
    order_by = "updated_at"
