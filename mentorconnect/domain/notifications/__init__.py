"""Notifications domain"""

from .router import router
from .service import notify, send_email_best_effort

__all__ = ["router", "notify", "send_email_best_effort"]
