from .run_config import DEFAULT_API_BASE_URL, LICENSE_ACCEPT_FLAG, RunConfig
from .run_result import RunResult, RunStatus

__all__ = [
    "DEFAULT_API_BASE_URL",
    "LICENSE_ACCEPT_FLAG",
    "RunConfig",
    "RunResult",
    "RunStatus",
]
