"""View engine abstraction and the Jinja2-backed view engine."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple, Union

import jinja2

from .exceptions import ConfigurationError
from .routing import ControllerContext
from .view_data import ViewBag, ViewDataDictionary

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = "jinja2"


@dataclass
class ViewContext:
    """State handed to a view while it renders."""

    controller_context: ControllerContext
    view: "View"
    view_data: ViewDataDictionary
    writer: TextIO
    view_bag: Optional[ViewBag] = None

    def __post_init__(self):
        if self.view_bag is None:
            self.view_bag = ViewBag(self.view_data)


class View(ABC):
    """A renderable view."""

    @abstractmethod
    def render(self, view_context: ViewContext, writer: TextIO) -> None:
        """Render the view.

        Args:
            view_context: Context of the current rendering
            writer: Text stream receiving the output
        """
        pass


@dataclass
class ViewEngineResult:
    """Outcome of a view lookup."""

    view: Optional[View] = None
    view_engine: Optional["ViewEngine"] = None
    searched_locations: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.view is not None


class ViewEngine(ABC):
    """Abstract base class for view engines."""

    @abstractmethod
    def find_view(
        self,
        controller_context: ControllerContext,
        view_name: str,
        master_name: Optional[str] = None,
    ) -> ViewEngineResult:
        """Resolve a view by name.

        Args:
            controller_context: Context of the mailer asking for the view
            view_name: Name of the view, including its format suffix
            master_name: Optional name of a layout view

        Returns:
            ViewEngineResult with the view, or the locations that were searched
        """
        pass

    def release_view(self, controller_context: ControllerContext, view: View) -> None:
        """Release a view once rendering is finished."""
        pass


class ViewEngineCollection(list):
    """Ordered registry of view engines."""

    def find_view(
        self,
        controller_context: ControllerContext,
        view_name: str,
        master_name: Optional[str] = None,
    ) -> ViewEngineResult:
        """Ask each engine in turn for a view.

        Returns:
            The first found result, or a result listing every searched location
        """
        searched: List[str] = []
        for engine in self:
            result = engine.find_view(controller_context, view_name, master_name)
            if result.found:
                if result.view_engine is None:
                    result.view_engine = engine
                return result
            searched.extend(result.searched_locations)
        return ViewEngineResult(searched_locations=searched)


# Process-wide view engine registry.
engines = ViewEngineCollection()


class JinjaView(View):
    """A view backed by a Jinja2 template."""

    def __init__(self, template: jinja2.Template, layout: Optional[jinja2.Template] = None):
        self.template = template
        self.layout = layout

    @property
    def name(self) -> str:
        return self.template.name

    def render(self, view_context: ViewContext, writer: TextIO) -> None:
        context: Dict[str, Any] = dict(view_context.view_data)
        context.update(
            model=view_context.view_data.model,
            view_bag=view_context.view_bag,
            view_data=view_context.view_data,
            layout=self.layout,
        )
        writer.write(self.template.render(**context))

    def __repr__(self) -> str:
        return f"JinjaView({self.name!r})"


class JinjaViewEngine(ViewEngine):
    """Resolves views from Jinja2 templates.

    Views are looked up by controller, falling back to ``shared``; mailers
    that belong to an area search the area's folders first.
    """

    area_location_formats: Tuple[str, ...] = (
        "areas/{area}/{controller}/{name}",
        "areas/{area}/shared/{name}",
    )
    location_formats: Tuple[str, ...] = (
        "{controller}/{name}",
        "shared/{name}",
    )

    def __init__(
        self,
        views_dir: Optional[Union[str, Path]] = None,
        loader: Optional[jinja2.BaseLoader] = None,
    ):
        """Initialize the view engine.

        Args:
            views_dir: Directory containing view templates
            loader: Jinja2 loader to use instead of a views directory

        Raises:
            ConfigurationError: If neither source is given or the directory is missing
        """
        if loader is None:
            if views_dir is None:
                raise ConfigurationError("Either views_dir or loader must be provided")
            views_path = Path(views_dir)
            if not views_path.is_dir():
                raise ConfigurationError(f"Views directory does not exist: {views_dir}")
            loader = jinja2.FileSystemLoader(str(views_path))

        self.env = jinja2.Environment(
            loader=loader,
            autoescape=jinja2.select_autoescape(
                enabled_extensions=("html", f"html.{TEMPLATE_EXTENSION}", "xml"),
                default_for_string=True,
                default=False,
            ),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def _candidates(self, controller_context: ControllerContext, name: str) -> List[str]:
        route_data = controller_context.route_data
        values = {
            "controller": route_data.controller or "",
            "area": route_data.area,
            "name": f"{name}.{TEMPLATE_EXTENSION}",
        }
        formats = list(self.location_formats)
        if route_data.area:
            formats = list(self.area_location_formats) + formats
        return [fmt.format(**values) for fmt in formats]

    def _find_template(
        self, controller_context: ControllerContext, name: str, searched: List[str]
    ) -> Optional[jinja2.Template]:
        for candidate in self._candidates(controller_context, name):
            try:
                return self.env.get_template(candidate)
            except jinja2.TemplateNotFound:
                searched.append(candidate)
        return None

    def find_view(
        self,
        controller_context: ControllerContext,
        view_name: str,
        master_name: Optional[str] = None,
    ) -> ViewEngineResult:
        searched: List[str] = []
        template = self._find_template(controller_context, view_name, searched)
        if template is None:
            return ViewEngineResult(searched_locations=searched)

        layout = None
        if master_name:
            # Masters share the view's format suffix (".txt" or ".html").
            suffix = view_name.rsplit(".", 1)[1] if "." in view_name else None
            layout_name = f"{master_name}.{suffix}" if suffix else master_name
            layout = self._find_template(controller_context, layout_name, searched)
            if layout is None:
                return ViewEngineResult(searched_locations=searched)

        logger.debug(f"Resolved view {view_name} to {template.name}")
        return ViewEngineResult(view=JinjaView(template, layout), view_engine=self)

    def list_views(self) -> Dict[str, List[str]]:
        """List available views and their formats.

        Returns:
            Mapping of view path (without format suffix) to formats, e.g.
            ``{"welcome/signup": ["html", "txt"]}``
        """
        views: Dict[str, List[str]] = {}
        for template_name in self.env.list_templates(extensions=[TEMPLATE_EXTENSION]):
            stem = template_name[: -(len(TEMPLATE_EXTENSION) + 1)]
            if "." not in stem:
                continue
            base, fmt = stem.rsplit(".", 1)
            views.setdefault(base, []).append(fmt)
        return {name: sorted(formats) for name, formats in sorted(views.items())}
