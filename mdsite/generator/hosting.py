"""Write hosting-provider configuration files next to the built site.

Each supported provider gets static files enabling SPA routing and sensible
cache headers. Unknown providers, including ``none``, write nothing.
"""

from __future__ import annotations

import logging
import typing as typ

from .artifacts import build_template_environment, write_artifact

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

    from mdsite.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Output filename mapped to its template; ``None`` writes an empty file.
HOSTING_FILES: dict[str, tuple[tuple[str, str | None], ...]] = {
    "cloudflare": (
        ("_headers", "hosting/cloudflare/_headers"),
        ("_redirects", "hosting/cloudflare/_redirects"),
    ),
    "netlify": (
        ("_headers", "hosting/netlify/_headers"),
        ("_redirects", "hosting/netlify/_redirects"),
    ),
    "vercel": (("vercel.json", "hosting/vercel/vercel.json"),),
    "github": (
        (".nojekyll", None),
        ("404.html", "hosting/github/404.html"),
    ),
}


class HostingConfigGenerator:
    """Emit the configuration files for ``config.hosting_provider``."""

    def __init__(
        self, config: GeneratorConfig, *, templates_dir: Path | None = None
    ) -> None:
        self.config = config
        self.env = build_template_environment(templates_dir)

    @property
    def provider(self) -> str:
        """Return the lower-cased hosting provider name."""
        return self.config.hosting_provider.strip().lower()

    def generate(self, cancel_event: threading.Event | None = None) -> list[Path]:
        """Write the provider's files and return their paths.

        Returns an empty list for providers without hosting files.
        """
        files = HOSTING_FILES.get(self.provider)
        if files is None:
            logger.info("No hosting files for provider %r", self.config.hosting_provider)
            return []
        written: list[Path] = []
        for filename, template_name in files:
            text = self.env.get_template(template_name).render() if template_name else ""
            path = write_artifact(self.config.output_path / filename, text, cancel_event)
            logger.info("Created %s", path)
            written.append(path)
        return written


__all__ = ["HOSTING_FILES", "HostingConfigGenerator"]
