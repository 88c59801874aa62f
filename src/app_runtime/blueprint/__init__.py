"""Declarative application model."""

from .models import AppSpec, ComponentType, LifecycleHooks, UIComponent

__all__ = ["AppSpec", "ComponentType", "LifecycleHooks", "UIComponent"]
