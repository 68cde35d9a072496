# -*- coding: utf-8 -*-
"""Admin menu management client: remote API calls, drafts and notices."""

from .client import MenuApiClient
from .dashboard import AdminDashboard
from .dragdrop import DragGesture

__all__ = ["MenuApiClient", "AdminDashboard", "DragGesture"]
