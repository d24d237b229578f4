import os

from pydantic import BaseModel, ConfigDict

_ENV_PREFIX = "MEDIATOR_NAVIGATOR_"

DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("bin", "obj", ".git", ".vs", "node_modules")


class NavigatorSettings(BaseModel):
    """Names and filters used when matching requests to handlers."""

    model_config = ConfigDict(frozen=True)

    request_interface: str = "IRequest"
    handler_interface: str = "IRequestHandler"
    source_extension: str = ".cs"
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS

    @classmethod
    def from_env(cls) -> "NavigatorSettings":
        defaults = cls()
        excluded = os.getenv(f"{_ENV_PREFIX}EXCLUDE_DIRS")
        return cls(
            request_interface=os.getenv(f"{_ENV_PREFIX}REQUEST_INTERFACE", defaults.request_interface),
            handler_interface=os.getenv(f"{_ENV_PREFIX}HANDLER_INTERFACE", defaults.handler_interface),
            source_extension=os.getenv(f"{_ENV_PREFIX}SOURCE_EXTENSION", defaults.source_extension),
            excluded_dirs=(
                tuple(part.strip() for part in excluded.split(",") if part.strip())
                if excluded is not None
                else defaults.excluded_dirs
            ),
        )

