from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from runfolia import __version__

DEFAULT_API_BASE_URL = "https://api.papermc.io/v2"
DEFAULT_USER_AGENT = f"run-folia/{__version__} (https://github.com/beengoo/run-folia)"
LICENSE_ACCEPT_FLAG = "-Dcom.mojang.eula.agree=true"


class RunConfig(BaseModel):
    """
    Immutable snapshot of one run's settings.

    Built once per invocation (YAML file, CLI flags or code) and never mutated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = Field(default="1.21.6", min_length=1)
    run_directory: Path = Path("build/run-folia")
    auto_accept_license: bool = True
    prefer_linking: bool = True
    force_refetch: bool = False
    extra_process_args: tuple[str, ...] = ()
    extra_server_args: tuple[str, ...] = ("--nogui",)

    # Build index
    project: str = Field(default="folia", min_length=1)
    api_base_url: str = DEFAULT_API_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_s: float | None = Field(default=30.0, gt=0)

    # Launch + staging inputs
    java_executable: str = Field(default="java", min_length=1)
    plugin_jar: Path | None = None
    plugin_search_dir: Path = Path("build/libs")
    plugins: tuple[Path, ...] = ()

    @field_validator("version", mode="before")
    @classmethod
    def _unquoted_yaml_number(cls, value: Any) -> Any:
        # `version: 1.20` in YAML arrives as the float 1.2
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ValueError("must be a string; quote the version, e.g. '1.20'")
        return value

    @field_validator("version", "project")
    @classmethod
    def _reject_path_like(cls, value: str) -> str:
        if value != value.strip() or "/" in value or "\\" in value:
            raise ValueError(f"must be a bare identifier, got {value!r}")
        return value

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"must be an http(s) URL, got {value!r}")
        return stripped

    @field_validator("extra_process_args", "extra_server_args", "plugins", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            raise ValueError("must be a list, not a single string")
        return value

    @property
    def server_jar_name(self) -> str:
        return f"{self.project}-{self.version}.jar"

    @property
    def server_jar_path(self) -> Path:
        return self.run_directory / self.server_jar_name

    @property
    def plugins_directory(self) -> Path:
        return self.run_directory / "plugins"
