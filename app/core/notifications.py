"""
User-facing notifications ("toasts") collected during a request.

Services push a success or destructive notification for every data operation;
the middleware in app.main serialises the request's list into the
X-Notifications response header so the frontend can display them.
"""

import json
from typing import List, Literal

from fastapi import Request
from pydantic import BaseModel

NOTIFICATIONS_HEADER = "X-Notifications"


class Notification(BaseModel):
    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = "default"


class Notifier:
    def __init__(self):
        self.notifications: List[Notification] = []

    def success(self, title: str, description: str = "") -> Notification:
        notification = Notification(title=title, description=description)
        self.notifications.append(notification)
        return notification

    def error(self, title: str, description: str = "") -> Notification:
        notification = Notification(title=title, description=description, variant="destructive")
        self.notifications.append(notification)
        return notification

    def to_header(self) -> str:
        # json.dumps escapes non-ASCII so the value is a valid header
        return json.dumps([n.model_dump() for n in self.notifications])


def get_notifier(request: Request) -> Notifier:
    """Return the request-scoped notifier, creating it when middleware did not."""
    if not hasattr(request.state, "notifier"):
        request.state.notifier = Notifier()
    return request.state.notifier
