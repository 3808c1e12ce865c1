"""Adapter layer package for Hava API and filesystem boundaries."""

from .hava_api import HavaApiClient
from .hava_errors import HavaAdapterError, HavaRequestTimeoutError, HavaTransportError
from .image_writer import FileSystemImageWriter
from .interfaces import AdapterHttpResponse, HavaApiPort, ImageWriterPort

__all__ = [
	"AdapterHttpResponse",
	"FileSystemImageWriter",
	"HavaAdapterError",
	"HavaApiClient",
	"HavaApiPort",
	"HavaRequestTimeoutError",
	"HavaTransportError",
	"ImageWriterPort",
]
