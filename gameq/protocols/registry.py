"""
Protocol registry

Maps protocol type names (as used in the ``type`` key of a server
descriptor) to handler factories. Handlers register explicitly, either with
``registry.register`` or the ``register_protocol`` class decorator, and the
whole table can be checked once at startup with ``registry.validate``.
"""
import importlib.util
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from gameq.config import settings
from gameq.exceptions import ProtocolError, UnknownProtocolError, ValidationError
from gameq.logging import get_logger
from gameq.protocols.base import Protocol

logger = get_logger("protocols")

ProtocolFactory = Callable[[Mapping[str, Any]], Protocol]


def canonical_name(type_name: str) -> str:
    """Normalize a protocol type name for lookup ("Source " -> "source")"""
    return str(type_name).strip().lower()


class ValidationIssue:
    """A problem found while validating a registered protocol"""

    def __init__(self, severity: str, protocol: str, message: str):
        self.severity = severity  # "error" or "warning"
        self.protocol = protocol
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "protocol": self.protocol,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"<ValidationIssue {self.severity} {self.protocol}: {self.message}>"


class ProtocolRegistry:
    """Lookup table from canonical protocol names to handler factories"""

    def __init__(self):
        self._factories: Dict[str, ProtocolFactory] = {}

    def register(self, name: str, factory: ProtocolFactory, replace: bool = False) -> None:
        """
        Register a handler factory under ``name``.

        Args:
            name: Protocol type name, matched case-insensitively
            factory: Protocol subclass or callable taking the options mapping
            replace: Allow overriding an existing registration

        Raises:
            ProtocolError: If the name is empty or already registered
        """
        key = canonical_name(name)
        if not key:
            raise ProtocolError("Protocol name must not be empty")
        if key in self._factories and not replace:
            raise ProtocolError(
                f"Protocol '{key}' is already registered",
                {"protocol": key},
            )
        self._factories[key] = factory
        logger.debug("protocol_registered", protocol=key)

    def unregister(self, name: str) -> None:
        self._factories.pop(canonical_name(name), None)

    def create(self, type_name: str, options: Optional[Mapping[str, Any]] = None) -> Protocol:
        """
        Build the handler for ``type_name``.

        Raises:
            UnknownProtocolError: If nothing is registered under the name
        """
        try:
            factory = self._factories[canonical_name(type_name)]
        except KeyError:
            raise UnknownProtocolError(type_name) from None
        return factory(dict(options or {}))

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def validate(self, strict: bool = False) -> List[ValidationIssue]:
        """
        Construct every registered handler and check its interface.

        Handlers that need options to be constructed are reported as
        warnings. With ``strict`` any error raises ProtocolError.
        """
        issues: List[ValidationIssue] = []

        for name, factory in sorted(self._factories.items()):
            try:
                handler = factory({})
            except ValidationError as e:
                issues.append(ValidationIssue("warning", name, f"requires options: {e.message}"))
                continue
            except Exception as e:
                issues.append(ValidationIssue("error", name, f"construction failed: {e}"))
                continue

            offset = getattr(handler, "port_offset", None)
            template = getattr(handler, "join_link_template", None)
            if not callable(offset) or not isinstance(offset(), int):
                issues.append(ValidationIssue("error", name, "port_offset() must return an int"))
            if not callable(template) or not isinstance(template(), str):
                issues.append(ValidationIssue("error", name, "join_link_template() must return a str"))

        for issue in issues:
            log = logger.error if issue.severity == "error" else logger.warning
            log("protocol_validation_issue", protocol=issue.protocol, message=issue.message)

        errors = [issue for issue in issues if issue.severity == "error"]
        if strict and errors:
            raise ProtocolError(
                f"{len(errors)} protocol handler(s) failed validation",
                {"issues": [issue.to_dict() for issue in errors]},
            )
        return issues

    def load_plugins(self, plugins_dir: Optional[Path] = None) -> List[str]:
        """
        Import protocol plugin modules from a directory.

        Each ``*.py`` file (names starting with ``_`` are skipped) is imported
        and is expected to register its handlers on import. A missing
        directory is ignored.

        Returns:
            Names of the imported plugin modules

        Raises:
            ProtocolError: If a plugin module fails to import
        """
        plugins_dir = plugins_dir or settings.protocols_dir
        if not plugins_dir.is_dir():
            return []

        loaded = []
        for plugin_file in sorted(plugins_dir.glob("*.py")):
            if plugin_file.name.startswith("_"):
                continue
            module_name = f"gameq_protocol_{plugin_file.stem}"
            logger.info("loading_protocol_plugin", plugin=plugin_file.stem, path=str(plugin_file))

            try:
                spec = importlib.util.spec_from_file_location(module_name, plugin_file)
                if spec is None or spec.loader is None:
                    raise ProtocolError(f"Could not create module spec for {plugin_file}")

                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception as e:
                sys.modules.pop(module_name, None)
                logger.error("protocol_plugin_load_failed", plugin=plugin_file.stem, error=str(e))
                raise ProtocolError(
                    f"Failed to load protocol plugin {plugin_file.stem}: {e}",
                    {"path": str(plugin_file)},
                ) from e

            loaded.append(plugin_file.stem)

        return loaded


# Global registry, built-in protocols register themselves on import of gameq.protocols
registry = ProtocolRegistry()


def register_protocol(name: str, *aliases: str, target: Optional[ProtocolRegistry] = None):
    """Class decorator registering a Protocol subclass under one or more names"""

    def decorator(cls):
        table = target if target is not None else registry
        for alias in (name,) + aliases:
            table.register(alias, cls)
        return cls

    return decorator
