"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request

from quid_label.api.quid_models import (
    CalculateRequest,
    CompoundRequest,
    IngredientPayload,
    QuidResultModel,
    SpecificationModel,
    SpecificationRequest,
    SpecificationResponse,
)
from quid_label.app_logging import configure_logging
from quid_label.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="QUID Label")
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/quid/calculate", response_model=QuidResultModel)
    async def calculate(payload: CalculateRequest, request: Request) -> QuidResultModel:
        """Calculate the declaration and nutrition of an ingredient list."""
        state_container: AppContainer = request.app.state.container
        result = state_container.quid_service.calculate(
            [item.to_domain() for item in payload.ingredients],
            payload.process_loss,
            payload.fat_loss,
            payload.loss_type or state_container.default_loss_type,
        )
        if result.warnings:
            logger.info("QUID calculation produced %s warning(s)", len(result.warnings))
        return QuidResultModel.from_domain(result)

    @app.post("/quid/specification", response_model=SpecificationResponse)
    async def specification(
        payload: SpecificationRequest, request: Request
    ) -> SpecificationResponse:
        """Calculate a recipe and return its specification sheet data."""
        state_container: AppContainer = request.app.state.container
        result, spec = state_container.quid_service.specification(
            payload.recipe.to_domain(), payload.product_name
        )
        return SpecificationResponse(
            specification=SpecificationModel.from_domain(spec),
            result=QuidResultModel.from_domain(result),
        )

    @app.post("/recipes/compound", response_model=IngredientPayload)
    async def compound(payload: CompoundRequest, request: Request) -> IngredientPayload:
        """Turn a saved recipe into a compound ingredient for another recipe."""
        state_container: AppContainer = request.app.state.container
        ingredient = state_container.quid_service.compound_from_recipe(
            payload.recipe.to_domain(), raw_weight=payload.raw_weight
        )
        return IngredientPayload.from_domain(ingredient)

    return app
