# Reexport all handlers

from .events import (
    handle_create_event,
    handle_delete_event,
    handle_get_event,
    handle_list_events,
    handle_update_event,
)
from .line_items import (
    handle_add_budget_item,
    handle_add_vendor,
    handle_update_budget_item,
    handle_update_vendor,
)
from .media import (
    handle_confirm_media_upload,
    handle_delete_media,
    handle_request_media_upload,
)
from .messages import handle_delete_message, handle_schedule_message
from .polls import handle_close_poll, handle_create_poll, handle_vote
from .rsvp import handle_rsvp

__all__ = [
    "handle_add_budget_item",
    "handle_add_vendor",
    "handle_close_poll",
    "handle_confirm_media_upload",
    "handle_create_event",
    "handle_create_poll",
    "handle_delete_event",
    "handle_delete_media",
    "handle_delete_message",
    "handle_get_event",
    "handle_list_events",
    "handle_request_media_upload",
    "handle_rsvp",
    "handle_schedule_message",
    "handle_update_budget_item",
    "handle_update_event",
    "handle_update_vendor",
    "handle_vote",
]
