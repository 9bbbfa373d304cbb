"""Jinja2 rendering of per-kind configuration templates.

Each plugin manager owns a template bundle under ``zpmbench/templates/<kind>/``.
A bundle entry's path relative to its kind directory is where it ends up in
the container home directory, dot-prefixed (``zshrc`` -> ``~/.zshrc``).
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from zpmbench.errors import RenderError, TemplateLoadError
from zpmbench.kinds import PLUGINS, Kind

logger = logging.getLogger(__name__)


def build_template_environment(templates_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment over the packaged bundles or ``templates_dir``."""
    loader: BaseLoader
    if templates_dir is not None:
        loader = FileSystemLoader(str(templates_dir))
    else:
        loader = PackageLoader("zpmbench", "templates")
    return Environment(
        loader=loader,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )


@lru_cache(maxsize=None)
def _packaged_environment() -> Environment:
    # Bundles are read-only at runtime, so one environment serves the process.
    return build_template_environment()


class TemplateRenderer:
    """Render a kind's template bundle against the shared plugin list."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        plugins: Sequence[str] = PLUGINS,
    ) -> None:
        if templates_dir is None:
            self.env = _packaged_environment()
        else:
            self.env = build_template_environment(templates_dir)
        self.plugins = list(plugins)

    def bundle_names(self, kind: Kind) -> list[str]:
        """Template names (``<kind>/<relative path>``) in the kind's bundle."""
        prefix = f"{kind.value}/"
        return sorted(self.env.list_templates(filter_func=lambda n: n.startswith(prefix)))

    def load_bundle(self, kind: Kind) -> dict[str, str]:
        """Return raw template text keyed by relative path.

        Raises:
            TemplateLoadError: If the bundle is empty or an entry is unreadable.
            RenderError: If an entry is not valid UTF-8.
        """
        names = self._require_bundle(kind)
        bundle: dict[str, str] = {}
        for name in names:
            relative = name[len(kind.value) + 1 :]
            try:
                source, _, _ = self.env.loader.get_source(self.env, name)
            except TemplateNotFound as e:
                raise TemplateLoadError(
                    f"Template '{relative}' for {kind} could not be loaded",
                    kind=kind.value,
                    path=relative,
                ) from e
            except UnicodeDecodeError as e:
                raise RenderError(
                    f"Template '{relative}' for {kind} is not valid UTF-8",
                    kind=kind.value,
                    path=relative,
                ) from e
            except OSError as e:
                raise TemplateLoadError(
                    f"Template '{relative}' for {kind} could not be read: {e}",
                    kind=kind.value,
                    path=relative,
                ) from e
            bundle[relative] = source
        return bundle

    def render(self, kind: Kind) -> dict[str, str]:
        """Render every file in the kind's bundle.

        The only variable in scope is ``plugins``. Output is deterministic
        for a fixed bundle and plugin list.

        Raises:
            TemplateLoadError: If the bundle is empty or an entry is unreadable.
            RenderError: If an entry cannot be decoded, parsed or rendered.
        """
        rendered: dict[str, str] = {}
        for relative, source in self.load_bundle(kind).items():
            try:
                template = self.env.from_string(source)
                rendered[relative] = template.render(plugins=self.plugins)
            except TemplateSyntaxError as e:
                raise RenderError(
                    f"Failed to render '{relative}' for {kind}: "
                    f"line {e.lineno}: {e.message}",
                    kind=kind.value,
                    path=relative,
                ) from e
            except TemplateError as e:
                raise RenderError(
                    f"Failed to render '{relative}' for {kind}: {e}",
                    kind=kind.value,
                    path=relative,
                ) from e
            logger.debug(f"Rendered {kind}/{relative} ({len(rendered[relative])} bytes)")
        return rendered

    def _require_bundle(self, kind: Kind) -> list[str]:
        names = self.bundle_names(kind)
        if not names:
            raise TemplateLoadError(
                f"No templates found for {kind}", kind=kind.value
            )
        return names
