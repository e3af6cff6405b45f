# diamant/core/__init__.py

from .exceptions import (
    DiamantError,
    InvalidUsageError,
    ManifestError,
    ManifestNotFoundError,
    ManifestLoadError,
    RegistryDefinitionError,
    DependencyCycleError,
    FileOperationError,
    TemplatesNotFoundError,
)

__all__ = [
    'DiamantError',
    'InvalidUsageError',
    'ManifestError',
    'ManifestNotFoundError',
    'ManifestLoadError',
    'RegistryDefinitionError',
    'DependencyCycleError',
    'FileOperationError',
    'TemplatesNotFoundError',
]
