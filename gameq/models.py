"""
Server descriptor and option models
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty(value: Any) -> bool:
    """Empty in the loose sense used for server info values ("", 0, "0", None, {})"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in ("", "0")
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (dict, list, tuple)):
        return len(value) == 0
    return False


class ServerOptions(BaseModel):
    """
    Per-server options.

    ``query_port`` and ``master_server_port`` are the reserved keys understood
    by the server itself. Anything else is kept as-is for the protocol
    handler (extra fields are allowed).
    """

    model_config = ConfigDict(extra="allow")

    query_port: Optional[int] = Field(
        default=None, description="Explicit query port, overrides the protocol port offset"
    )
    master_server_port: Optional[int] = Field(
        default=None, description="Port of the master/virtual server (Teamspeak 3 and similar)"
    )

    @field_validator("query_port", "master_server_port", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if _empty(value):
            return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Return an option value or ``default`` when it is not set"""
        if key in type(self).model_fields:
            value = getattr(self, key)
            return default if value is None else value
        extra = self.model_extra or {}
        return extra.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set an option without validating the value"""
        if key in type(self).model_fields:
            setattr(self, key, value)
            return
        # "get", "copy", "_x" and friends are model attributes, not options
        if self.__pydantic_extra__ is None:
            self.__pydantic_extra__ = {}
        self.__pydantic_extra__[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Options that are set, reserved keys first"""
        return {key: value for key, value in self.model_dump().items() if value is not None}


class ServerInfo(BaseModel):
    """
    Raw server descriptor as supplied by callers.

    Server also accepts a plain mapping with the same keys; this model is the
    typed form used when descriptors come from config files or APIs.
    """

    type: str
    host: str
    id: Optional[str] = None
    options: Dict[str, Any] = Field(default_factory=dict)
