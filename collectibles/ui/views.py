"""
views.py - UI view builders
Single responsibility: build flet Views from components and an explicit router.
"""

import flet as ft

from collectibles.config import (
    APP_TITLE,
    COLOR_APPBAR_BG,
    COLOR_APPBAR_FG,
    COLOR_BG,
    ROUTE_DASHBOARD,
    SHADOW_ELEVATION,
)
from collectibles.ui.components.account_dashboard import AccountDashboardPanel


def build_appbar() -> ft.AppBar:
    return ft.AppBar(
        title=ft.Text(
            APP_TITLE,
            color=COLOR_APPBAR_FG,
            weight=ft.FontWeight.BOLD,
            size=20,
        ),
        bgcolor=COLOR_APPBAR_BG,
        center_title=False,
        elevation=SHADOW_ELEVATION,
        shadow_color=ft.Colors.with_opacity(0.12, ft.Colors.BLACK),
        automatically_imply_leading=False,
    )


def build_account_dashboard_view(router=None, route: str = ROUTE_DASHBOARD) -> ft.View:
    return ft.View(
        route=route,
        appbar=build_appbar(),
        bgcolor=COLOR_BG,
        padding=ft.Padding.symmetric(horizontal=24, vertical=16),
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        scroll=ft.ScrollMode.AUTO,
        controls=[AccountDashboardPanel(router=router)],
    )
