"""Semantic navigation and validation for a UI design-component library."""
