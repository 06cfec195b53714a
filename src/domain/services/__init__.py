"""Domain services package.

Modules are imported directly (``src.domain.services.fx`` and friends) so
that models can rely on the normalization helpers without import cycles.
"""
