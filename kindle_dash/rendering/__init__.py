"""Rendering utilities for the e-ink dashboard."""

from kindle_dash.rendering.composer import compose_dashboard
from kindle_dash.rendering.emulator import prepare_for_device, save_frame
from kindle_dash.rendering.frame_data import DashboardSnapshot

__all__ = ["DashboardSnapshot", "compose_dashboard", "prepare_for_device", "save_frame"]
