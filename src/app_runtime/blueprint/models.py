"""UI Data Models."""

from enum import Enum
from typing import Any, Iterator
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ComponentType(str, Enum):
    """Component kinds the presentation layer knows how to render."""

    BUTTON = "button"
    INPUT = "input"
    TEXT = "text"
    CONTAINER = "container"
    GRID = "grid"
    UNKNOWN = "unknown"


class UIComponent(BaseModel):
    """One node of the declarative component tree."""

    model_config = ConfigDict(extra="ignore")

    type: ComponentType = Field(..., description="Component type")
    id: str | None = Field(default=None, description="Unique identifier, used as state key")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["UIComponent"] = Field(default_factory=list)
    on_event: dict[str, str] = Field(default_factory=dict)
    declared_type: str | None = Field(
        default=None, description="Original type name when it was not recognized"
    )

    @model_validator(mode="before")
    @classmethod
    def _fallback_type(cls, data: Any) -> Any:
        """Map unrecognized component kinds to UNKNOWN, keeping the original name."""
        if not isinstance(data, dict):
            return data
        declared = data.get("type")
        known = {t.value for t in ComponentType}
        if isinstance(declared, str) and declared not in known:
            data = {**data, "type": ComponentType.UNKNOWN, "declared_type": declared}
        return data

    @field_validator("props", "on_event", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def _none_as_no_children(cls, v: Any) -> Any:
        return [] if v is None else v

    def walk(self) -> Iterator["UIComponent"]:
        """Yield this component and its descendants, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def tool_for(self, event_name: str) -> str | None:
        """Tool bound to an event, if any."""
        return self.on_event.get(event_name)


class LifecycleHooks(BaseModel):
    """Tool ids run at install and teardown."""

    model_config = ConfigDict(extra="ignore")

    on_mount: list[str] = Field(default_factory=list)
    on_unmount: list[str] = Field(default_factory=list)

    @field_validator("on_mount", "on_unmount", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class AppSpec(BaseModel):
    """Complete application specification."""

    model_config = ConfigDict(extra="ignore")

    title: str
    layout: str = Field(default="vertical")
    style: dict[str, Any] = Field(default_factory=dict)
    components: list[UIComponent] = Field(default_factory=list)
    lifecycle_hooks: LifecycleHooks = Field(default_factory=LifecycleHooks)

    @field_validator("style", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("lifecycle_hooks", mode="before")
    @classmethod
    def _none_as_no_hooks(cls, v: Any) -> Any:
        return {} if v is None else v

    def walk(self) -> Iterator[UIComponent]:
        """Yield every component in the tree, depth-first pre-order."""
        for component in self.components:
            yield from component.walk()

    def find_component(self, component_id: str) -> UIComponent | None:
        """Find a component by id."""
        for component in self.walk():
            if component.id == component_id:
                return component
        return None

    def component_ids(self) -> list[str]:
        """All component ids in tree order (components without an id are skipped)."""
        return [c.id for c in self.walk() if c.id is not None]


UIComponent.model_rebuild()
