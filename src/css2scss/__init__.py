"""css2scss - turn flat CSS into nested SCSS."""

__version__ = "1.0.0"

from css2scss.config import ConversionOptions, IndentType  # noqa: E402
from css2scss.converter import ConversionResult, Converter, convert  # noqa: E402
from css2scss.errors import ConfigurationError, ParseError  # noqa: E402
from css2scss.events import EventBus, logging_listener  # noqa: E402

__all__ = [
    "__version__",
    "ConfigurationError",
    "ConversionOptions",
    "ConversionResult",
    "Converter",
    "EventBus",
    "IndentType",
    "ParseError",
    "convert",
    "logging_listener",
]
