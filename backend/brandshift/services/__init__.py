"""Services layer - Business logic.

Services contain business logic and orchestrate operations between
repositories, integrations, and other services.
"""

from brandshift.services.brand import (
    BrandNotFoundError,
    BrandService,
    BrandServiceError,
)
from brandshift.services.color_scheme import (
    COLOR_SCHEME_SYSTEM_PROMPT,
    ColorSchemeOutputError,
    ColorSchemeService,
    ColorSchemeServiceError,
    ColorSchemeValidationError,
    build_color_scheme_prompt,
    interpret_color_scheme_response,
)
from brandshift.services.project import (
    ProjectNotFoundError,
    ProjectService,
    ProjectServiceError,
    ProjectValidationError,
)

__all__ = [
    "BrandNotFoundError",
    "BrandService",
    "BrandServiceError",
    "COLOR_SCHEME_SYSTEM_PROMPT",
    "ColorSchemeOutputError",
    "ColorSchemeService",
    "ColorSchemeServiceError",
    "ColorSchemeValidationError",
    "ProjectNotFoundError",
    "ProjectService",
    "ProjectServiceError",
    "ProjectValidationError",
    "build_color_scheme_prompt",
    "interpret_color_scheme_response",
]
