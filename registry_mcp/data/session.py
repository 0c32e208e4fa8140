"""Dashboard session facade — one live controller per server process."""

from __future__ import annotations

from registry_mcp.clients.registry import RegistryClient
from registry_mcp.config import RegistrySettings, load_settings
from registry_mcp.dashboard.controller import FetchController

_controller: FetchController | None = None
_started = False


def build_controller(settings: RegistrySettings) -> FetchController:
    """Wire a controller to real registry clients for *settings*."""

    def _client_factory() -> RegistryClient:
        return RegistryClient(settings.base_url, timeout=settings.request_timeout)

    return FetchController(
        _client_factory,
        page_size=settings.page_size,
        highlights_on_refetch=settings.highlights_on_refetch,
    )


def get_controller() -> FetchController:
    """Return the active controller singleton, creating it from env if needed."""
    global _controller  # noqa: PLW0603
    if _controller is None:
        _controller = build_controller(load_settings())
    return _controller


def set_controller(controller: FetchController | None) -> None:
    """Inject a controller instance for testing."""
    global _controller, _started  # noqa: PLW0603
    _controller = controller
    _started = False


async def get_started_controller() -> FetchController:
    """Return the controller, running its initial mount fetch once."""
    global _started  # noqa: PLW0603
    controller = get_controller()
    if not _started:
        _started = True
        await controller.start()
    return controller
