from .core.config import ConfigManager, ExportConfig
from .exporter import ExportProgressCallback, ExportSummary, Feishu2Html

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "ExportConfig",
    "ExportProgressCallback",
    "ExportSummary",
    "Feishu2Html",
    "__version__",
]
