"""
app_main.py - Collectibles ダッシュボード メインアプリケーション
"""

import logging

import flet as ft

from collectibles.config import APP_TITLE, COLOR_BG, COLOR_PRIMARY
from collectibles.ui import views
from collectibles.ui.routing import Router

logger = logging.getLogger(__name__)


# ==========================================================================
# メインアプリ
# ==========================================================================


def main(page: ft.Page):
    page.title = APP_TITLE
    page.theme_mode = ft.ThemeMode.LIGHT
    page.bgcolor = COLOR_BG
    page.padding = 0
    page.theme = ft.Theme(
        color_scheme_seed=COLOR_PRIMARY,
        font_family="Roboto",
    )

    router = Router(page)

    def show_dashboard():
        try:
            page.views.clear()
            page.views.append(
                views.build_account_dashboard_view(router=router, route=router.current)
            )
            page.update()
        except Exception as exc:
            logger.exception("Error building dashboard view")
            page.overlay.append(
                ft.AlertDialog(
                    title=ft.Text("An error occurred"),
                    content=ft.Text(f"Details: {exc}"),
                    open=True,
                )
            )
            page.update()

    def route_change(_e: ft.RouteChangeEvent):
        # 未知のルートはダッシュボードへフォールバック
        if not router.is_known():
            logger.debug("Unknown route %r, showing dashboard", router.current)
        show_dashboard()

    def view_pop(_e: ft.ViewPopEvent = None):
        if len(page.views) > 1:
            page.views.pop()
        page.update()

    page.on_route_change = route_change
    page.on_view_pop = view_pop

    show_dashboard()


# ==========================================================================
# エントリーポイント
# ==========================================================================


if __name__ == "__main__":
    ft.app(main)
