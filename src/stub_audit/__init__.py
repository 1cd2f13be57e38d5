"""stub_audit — finds incomplete code before it ships."""

__all__ = [
    "__version__",
    "scan_project",
    "ScanConfig",
    "ScanResult",
    "ScanSummary",
    "Finding",
    "Category",
    "Severity",
    "ExitCode",
]
__version__ = "0.1.0"

# Programmatic entrypoint; ``stub_audit.model.scan_result`` reads __version__.
from stub_audit.api import scan_project  # noqa: E402, F401
from stub_audit.core.config import ScanConfig  # noqa: E402, F401
from stub_audit.model import Category, Severity  # noqa: E402, F401
from stub_audit.model.finding import Finding  # noqa: E402, F401
from stub_audit.model.scan_result import ScanResult, ScanSummary  # noqa: E402, F401
from stub_audit.policy.exit_codes import ExitCode  # noqa: E402, F401
