"""App Orchestrator Client"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core import OrchestratorError, get_logger
from .base import BackendHTTPClient

logger = get_logger(__name__)


class GeneratedApp(BaseModel):
    """Orchestrator answer to a generation request."""

    application_id: str = Field(validation_alias=AliasChoices("application_id", "app_id"))
    ui_spec: dict[str, Any] = Field(default_factory=dict)

    @field_validator("ui_spec", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class OrchestratorClient(BackendHTTPClient):
    """
    Client for the app orchestrator: generates child applications and
    lists the ones currently running.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 5.0, **kwargs: Any) -> None:
        super().__init__(base_url, timeout=timeout, name="app-orchestrator", **kwargs)

    async def generate_ui(
        self, message: str, parent_application_id: str | None = None
    ) -> GeneratedApp:
        """
        Request a new application.

        Args:
            message: Free-text description of the app to build
            parent_application_id: Application that asked for the spawn

        Returns:
            Generated application id and raw UI spec

        Raises:
            OrchestratorError: Response carried an ``error`` field or was malformed
        """
        payload = {
            "message": message,
            "context": {"parent_application_id": parent_application_id},
        }
        response = await self._request("POST", "/generate-ui", json=payload)
        data = response.json()

        if not isinstance(data, dict):
            raise OrchestratorError(f"Invalid orchestrator response: {type(data).__name__}")
        if data.get("error"):
            raise OrchestratorError(str(data["error"]))
        if not (data.get("application_id") or data.get("app_id")):
            raise OrchestratorError("Orchestrator response missing application_id")

        try:
            generated = GeneratedApp.model_validate(data)
        except PydanticValidationError as e:
            raise OrchestratorError(f"Invalid orchestrator response: {e.errors()[0]['msg']}") from e

        logger.info("app_generated", application_id=generated.application_id)
        return generated

    async def list_apps(self) -> list[dict[str, Any]]:
        """List applications known to the orchestrator."""
        response = await self._request("GET", "/apps")
        data = response.json()

        if not isinstance(data, dict):
            logger.error("invalid_response", type=type(data).__name__)
            return []

        apps = data.get("apps", [])
        logger.info("apps_listed", count=len(apps))
        return apps
