"""Dependency container wiring for the application."""

from dataclasses import dataclass

from quid_label.config import Settings
from quid_label.domain.ingredients import LossType
from quid_label.services.quid import QuidService, parse_loss_type


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    quid_service: QuidService
    default_loss_type: LossType


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    quid_service = QuidService(
        water_declaration_threshold=resolved_settings.water_declaration_threshold_percent,
        max_depth=resolved_settings.max_recipe_depth,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        quid_service=quid_service,
        default_loss_type=parse_loss_type(resolved_settings.default_loss_type),
    )
