from pathlib import Path
from typing import Any, Dict, Optional

from trackcodes.batch import BatchCoordinator
from trackcodes.config import TrackingConfig, load_config
from trackcodes.generator import TrackingCodeGenerator


class AppContext:
    """
    Process-wide context (singleton) for trackcodes.
    Держит конфигурацию, генератор кодов и координатор пакетной генерации.
    """

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        config_path: Optional[Path] = None,
        self_check: bool = False,
    ) -> None:
        self.config: TrackingConfig = config or load_config(config_path)
        self.generator = TrackingCodeGenerator(self.config, self_check=self_check)
        self.batch = BatchCoordinator(
            self.generator,
            chunk_size=self.config.batch_size,
            max_workers=self.config.max_workers,
        )

        # Extendable services dictionary (catalog adapters, audit hooks)
        self.services: Dict[str, Any] = {}

    def register_service(self, name: str, service: Any) -> None:
        """Register a service by name (extendable)."""
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """Retrieve a registered service by name."""
        return self.services[name]


_ctx: Optional[AppContext] = None


def get_app_context(
    config: Optional[TrackingConfig] = None,
    config_path: Optional[Path] = None,
) -> AppContext:
    """
    Returns global app context (singleton!). Built lazily on first use;
    arguments only matter for that first call.
    """
    global _ctx
    if _ctx is None:
        _ctx = AppContext(config=config, config_path=config_path)
    return _ctx


def reset_app_context(config: Optional[TrackingConfig] = None) -> AppContext:
    """Drop the current context and build a new one (config reload, tests)."""
    global _ctx
    _ctx = AppContext(config=config)
    return _ctx
