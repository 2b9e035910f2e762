"""Route data and controller context for mailers."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RouteData:
    """Route values and data tokens describing the executing mailer."""

    values: Dict[str, Any] = field(default_factory=dict)
    data_tokens: Dict[str, Any] = field(default_factory=dict)

    @property
    def controller(self) -> Optional[str]:
        return self.values.get("controller")

    @property
    def area(self) -> Optional[str]:
        return self.data_tokens.get("area")


@dataclass
class ControllerContext:
    """Everything a view engine needs to know about the executing mailer."""

    mailer: Any
    route_data: RouteData = field(default_factory=RouteData)
    http_context: Any = None


_SUFFIXES = ("Mailer", "Controller")


def controller_name_for(cls: type) -> str:
    """Get the controller name of a mailer class.

    ``WelcomeMailer`` becomes ``welcome`` and ``TestMailController`` becomes
    ``test_mail``. A ``controller_name`` class attribute takes precedence.
    """
    explicit = getattr(cls, "controller_name", None)
    if explicit:
        return explicit

    name = cls.__name__
    for suffix in _SUFFIXES:
        if name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
            break

    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


def detect_area(cls: type) -> Optional[str]:
    """Find the area a mailer class belongs to.

    An ``area`` class attribute wins; otherwise the module segment after
    ``areas`` is used (``shop.areas.billing.mailers`` -> ``billing``).
    """
    explicit = getattr(cls, "area", None)
    if explicit:
        return explicit

    segments = cls.__module__.split(".")
    for index, segment in enumerate(segments[:-1]):
        if segment == "areas":
            return segments[index + 1]
    return None


def build_route_data(mailer: Any) -> RouteData:
    """Build route data for a mailer instance; instance overrides win."""
    cls = type(mailer)
    controller = getattr(mailer, "controller_name", None) or controller_name_for(cls)
    route_data = RouteData(values={"controller": controller})
    area = getattr(mailer, "area", None) or detect_area(cls)
    if area:
        route_data.data_tokens["area"] = area
    return route_data
