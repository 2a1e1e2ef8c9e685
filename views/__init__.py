"""Views package for UI components."""
from .dashboard import render_dashboard
from .add import render_add
from .transactions import render_transactions
from .tasks import render_tasks
from .gold import render_gold
from .compare import render_compare
from .settings import render_settings
from .navigation import render_bottom_nav

__all__ = [
    "render_dashboard",
    "render_add",
    "render_transactions",
    "render_tasks",
    "render_gold",
    "render_compare",
    "render_settings",
    "render_bottom_nav",
]
