# diamant/core/exceptions.py

from typing import Optional, List

"""
Diamant domain-specific exceptions.

This module contains custom exceptions for the Diamant component CLI,
providing clear error messages and separating concerns between library
code (which raises exceptions) and CLI code (which handles them).
"""

class DiamantError(Exception):
    """Base exception for all Diamant errors."""
    pass

class InvalidUsageError(DiamantError):
    """Raised when a command is used in an unsupported way."""
    pass

# ==============================================================
# MANIFEST ERRORS
# ==============================================================

class ManifestError(DiamantError):
    """Base exception for manifest-related errors."""
    pass

class ManifestNotFoundError(ManifestError):
    """Raised when diamant.json is not found."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No diamant.json found in {path}")

class ManifestLoadError(ManifestError):
    """Raised when diamant.json exists but cannot be parsed or validated."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Failed to read {path}:\n    → {details}")

# ==============================================================
# REGISTRY ERRORS
# ==============================================================

class RegistryDefinitionError(DiamantError):
    """Raised when the component table is inconsistent."""
    def __init__(self, details: str):
        self.details = details
        super().__init__(f"Invalid component registry: {details}")

class DependencyCycleError(RegistryDefinitionError):
    """Raised when internal dependencies form a cycle."""
    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"dependency cycle detected: {' → '.join(cycle)}")

# ==============================================================
# FILE ERRORS
# ==============================================================

class FileOperationError(DiamantError):
    """Raised when reading a template or writing/deleting a project file fails."""
    def __init__(self, operation: str, path: str, details: Optional[str] = None):
        self.operation = operation
        self.path = path
        self.details = details
        message = f"Could not {operation} {path}"
        if details:
            message += f": {details}"
        super().__init__(message)

class TemplatesNotFoundError(DiamantError):
    """Raised when the component template directory does not exist."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Templates directory not found:\n    → {path}\n"
            "Reinstall diamant or check DIAMANT_TEMPLATES_DIR."
        )
