"""Template cache for the HTML pages.

Every page under ``templates/pages`` extends ``base.html`` and may include
anything under ``templates/partials``. The cache is built once at startup;
a missing or broken template stops the application from starting.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from fastapi.templating import Jinja2Templates
from jinja2 import Template

from snippetbox.db.models.snippet import Snippet

# Get package directory
PACKAGE_DIR = Path(__file__).parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"

BASE_LAYOUT = "base.html"


def human_date(t: Optional[datetime]) -> str:
    """Format ``t`` in UTC as '17 Mar 2026 at 10:15'; naive values are taken as UTC."""
    if t is None:
        return ""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc).strftime("%d %b %Y at %H:%M")


# Helper functions exposed to templates as filters
TEMPLATE_FUNCTIONS: Mapping[str, Callable[..., Any]] = MappingProxyType(
    {
        "human_date": human_date,
    }
)


@dataclass
class TemplateData:
    """Everything a page template can read."""

    current_year: int = 0
    snippet: Optional[Snippet] = None
    snippets: List[Snippet] = field(default_factory=list)
    form: Any = None
    flash: str = ""
    is_authenticated: bool = False
    csrf_token: str = ""

    def as_context(self) -> Dict[str, Any]:
        return dict(vars(self))


class TemplateNotCachedError(LookupError):
    """Raised when rendering a page that is not in the cache."""


class TemplateCache:
    """Read-only mapping of page file name to its compiled template."""

    def __init__(self, templates: Mapping[str, Template]):
        self._templates = MappingProxyType(dict(templates))

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def names(self) -> List[str]:
        return sorted(self._templates)

    def render(self, name: str, data: TemplateData) -> str:
        try:
            template = self._templates[name]
        except KeyError:
            raise TemplateNotCachedError(f"the template {name} does not exist") from None
        return template.render(data.as_context())


def new_template_cache(
    directory: Path = TEMPLATES_DIR,
    functions: Mapping[str, Callable[..., Any]] = TEMPLATE_FUNCTIONS,
) -> TemplateCache:
    """Compile the base layout, every partial and every page.

    Raises:
        jinja2.TemplateNotFound: a file is missing (including the base layout)
        jinja2.TemplateSyntaxError: a file does not parse
    """
    templates = Jinja2Templates(directory=str(directory))
    # Filters must be registered before anything is compiled
    templates.env.filters.update(functions)

    env = templates.env
    env.get_template(BASE_LAYOUT)
    for partial in sorted((directory / "partials").glob("*.html")):
        env.get_template(f"partials/{partial.name}")

    cache: Dict[str, Template] = {}
    for page in sorted((directory / "pages").glob("*.html")):
        cache[page.name] = env.get_template(f"pages/{page.name}")

    return TemplateCache(cache)
