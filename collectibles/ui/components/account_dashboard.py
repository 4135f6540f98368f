"""
account_dashboard.py - Asset Details panel
Single responsibility: static account summary; no data source is bound yet.
"""
import flet as ft
from collectibles.config import (
    COLOR_TEXT_MAIN,
    DASHBOARD_MAX_WIDTH,
    SPACING_UNIT,
    TITLE_BOTTOM_GAP,
    TITLE_FONT_SIZE,
    BODY_FONT_SIZE,
)
from collectibles.domain.models import AccountDashboardState

TITLE_TEXT = "Asset Details"
BALANCE_LABEL = "Balance: "


def render_account_dashboard(router=None) -> ft.Container:
    """Static "Asset Details" panel; builds fresh controls on every call.

    ``router`` is accepted so callers wire navigation explicitly; the panel
    has nothing to navigate to yet.
    """
    return ft.Container(
        width=DASHBOARD_MAX_WIDTH,
        margin=ft.Margin.symmetric(vertical=4 * SPACING_UNIT),
        padding=ft.Padding.symmetric(vertical=8 * SPACING_UNIT),
        content=ft.Column(
            controls=[
                ft.Container(
                    content=ft.Text(
                        TITLE_TEXT,
                        size=TITLE_FONT_SIZE,
                        weight=ft.FontWeight.W_400,
                        color=COLOR_TEXT_MAIN,
                    ),
                    margin=ft.Margin.only(bottom=TITLE_BOTTOM_GAP),
                ),
                ft.Column(
                    controls=[
                        ft.Text(
                            BALANCE_LABEL,
                            size=BODY_FONT_SIZE,
                            color=COLOR_TEXT_MAIN,
                        ),
                    ],
                ),
            ],
            spacing=0,
        ),
    )


class AccountDashboardPanel(ft.Container):
    def __init__(self, router=None):
        super().__init__()
        self.router = router
        self.dashboard_state = AccountDashboardState()
        self.content = render_account_dashboard(router)
