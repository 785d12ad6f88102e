"""Configuration module for the Document Catalog Service."""

from .settings import get_settings, Settings
from .rules import ClassificationRules, load_classification_rules

__all__ = ["get_settings", "Settings", "ClassificationRules", "load_classification_rules"]
