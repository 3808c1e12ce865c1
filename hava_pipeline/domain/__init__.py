"""Domain models used across application layer boundaries."""

from .error_codes import HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode
from .models import VIEW_TYPE_MAP, HavaResult, PipelineInput, View

__all__ = [
	"HAVA_UNAUTHORIZED_MESSAGE",
	"HavaErrorCode",
	"HavaResult",
	"PipelineInput",
	"VIEW_TYPE_MAP",
	"View",
]
