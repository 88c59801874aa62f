"""Tests for the declarative app models and spec validation."""

import pytest
from hypothesis import given, strategies as st
from returns.pipeline import is_successful

from app_runtime.blueprint import AppSpec, ComponentType, UIComponent
from app_runtime.core import GenerationRequest, ValidationError, validate_app_spec, validate_json_depth


@pytest.mark.unit
def test_component_defaults():
    """Test optional component fields default to empty."""
    component = UIComponent(type="button")

    assert component.type == ComponentType.BUTTON
    assert component.id is None
    assert component.props == {}
    assert component.children == []
    assert component.on_event == {}
    assert component.tool_for("click") is None


@pytest.mark.unit
def test_unknown_component_type_is_preserved():
    """Test unrecognized kinds parse as UNKNOWN with the declared name kept."""
    component = UIComponent.model_validate({"type": "slider", "id": "volume"})

    assert component.type == ComponentType.UNKNOWN
    assert component.declared_type == "slider"


@pytest.mark.unit
def test_null_fields_are_coerced():
    component = UIComponent.model_validate(
        {"type": "container", "props": None, "children": None, "on_event": None}
    )
    assert component.props == {}
    assert component.children == []


@pytest.mark.unit
def test_app_spec_walk_and_find(sample_ui_spec):
    """Test the tree is traversed depth-first in declaration order."""
    spec = AppSpec.model_validate(sample_ui_spec)

    assert spec.component_ids() == ["display", "keypad", "btn-7", "btn-equals"]
    button = spec.find_component("btn-equals")
    assert button.tool_for("click") == "calc.evaluate"
    assert spec.find_component("nope") is None
    assert spec.lifecycle_hooks.on_mount == ["calc.clear"]


@pytest.mark.unit
def test_app_spec_defaults():
    spec = AppSpec.model_validate({"title": "Blank", "lifecycle_hooks": None, "style": None})

    assert spec.layout == "vertical"
    assert spec.components == []
    assert spec.lifecycle_hooks.on_mount == []
    assert spec.lifecycle_hooks.on_unmount == []


class TestValidateAppSpec:
    """Test spec validation."""

    @pytest.mark.unit
    def test_valid_spec(self, sample_ui_spec):
        result = validate_app_spec(sample_ui_spec)

        assert is_successful(result)
        assert result.unwrap().title == "Calculator"

    @pytest.mark.unit
    def test_accepts_built_spec(self):
        assert is_successful(validate_app_spec(AppSpec(title="Built")))

    @pytest.mark.unit
    def test_missing_title(self):
        result = validate_app_spec({"components": []})

        assert not is_successful(result)
        assert "title" in result.failure().message

    @pytest.mark.unit
    def test_components_must_be_a_list(self):
        result = validate_app_spec({"title": "X", "components": {"type": "button"}})
        assert "must be a list" in result.failure().message

    @pytest.mark.unit
    def test_non_object(self):
        assert not is_successful(validate_app_spec(["title"]))

    @pytest.mark.unit
    def test_duplicate_ids(self):
        spec = {
            "title": "Dupes",
            "components": [
                {"type": "text", "id": "label"},
                {"type": "container", "children": [{"type": "text", "id": "label"}]},
            ],
        }
        result = validate_app_spec(spec)
        assert "Duplicate component id 'label'" == result.failure().message

    @pytest.mark.unit
    def test_size_limit(self):
        spec = {"title": "Big", "components": [{"type": "text", "props": {"content": "x" * 2000}}]}
        result = validate_app_spec(spec, max_size=1000)
        assert "exceeds maximum" in result.failure().message

    @pytest.mark.unit
    def test_depth_limit(self):
        node = {"type": "container", "children": []}
        spec = {"title": "Deep", "components": [node]}
        for _ in range(10):
            child = {"type": "container", "children": []}
            node["children"].append(child)
            node = child

        assert is_successful(validate_app_spec(spec, max_depth=50))
        assert not is_successful(validate_app_spec(spec, max_depth=5))

    @pytest.mark.unit
    def test_bad_field_type_reports_location(self):
        result = validate_app_spec({"title": "X", "components": [{"type": "button", "on_event": "click"}]})

        failure = result.failure()
        assert failure.field == "components.0.on_event"


@pytest.mark.unit
def test_validate_json_depth():
    validate_json_depth({"a": {"b": [1]}}, max_depth=3)
    with pytest.raises(ValidationError):
        validate_json_depth({"a": {"b": {"c": {}}}}, max_depth=2)


@pytest.mark.unit
@given(message=st.text(min_size=1, max_size=200).filter(lambda s: s.strip()))
def test_generation_request_strips_message(message):
    """Test any non-blank message is accepted and stripped."""
    request = GenerationRequest(message=message)
    assert request.message == message.strip()
