"""
Storefront proxy configuration.

The storefront forwards every `/api/*` path to the backend base URL and
only renders images served from an allow-listed set of domains. This module
holds those rules and the helpers that evaluate them.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern
from urllib.parse import urlparse

from boutique.config.settings import Settings

_PARAM = re.compile(r":(\w+)(\*)?")


@dataclass(frozen=True)
class RewriteRule:
    """
    Path rewrite rule using `:name` / `:name*` placeholders.

    `:name` matches a single path segment, `:name*` matches zero or more
    segments.

    Example:
        rule = RewriteRule("/api/:path*", "http://backend:9000/:path*")
        rule.apply("/api/store/products")
        # -> "http://backend:9000/store/products"
    """

    source: str
    destination: str

    @property
    def pattern(self) -> Pattern[str]:
        """Compiled regex for the source path."""
        regex = ""
        position = 0
        for match in _PARAM.finditer(self.source):
            literal = self.source[position:match.start()]
            name, repeat = match.group(1), match.group(2)
            if repeat and literal.endswith("/"):
                # "/:path*" also matches the bare prefix
                regex += re.escape(literal[:-1]) + f"(?:/(?P<{name}>.*))?"
            elif repeat:
                regex += re.escape(literal) + f"(?P<{name}>.*)"
            else:
                regex += re.escape(literal) + f"(?P<{name}>[^/]+)"
            position = match.end()
        regex += re.escape(self.source[position:])
        return re.compile(f"^{regex}$")

    def apply(self, path: str) -> Optional[str]:
        """
        Rewrite path if it matches the rule.

        Args:
            path: Request path (query string allowed)

        Returns:
            Rewritten URL, or None if the rule does not match
        """
        path, _, query = path.partition("?")
        match = self.pattern.match(path)
        if match is None:
            return None

        params = {k: v or "" for k, v in match.groupdict().items()}
        destination = _PARAM.sub(
            lambda m: params.get(m.group(1), ""), self.destination
        )
        return f"{destination}?{query}" if query else destination


@dataclass
class StorefrontConfig:
    """Storefront configuration (rewrites, images, public env)."""

    backend_url: str
    image_domains: List[str] = field(default_factory=list)
    react_strict_mode: bool = True

    def rewrites(self) -> List[RewriteRule]:
        """Proxy rules, evaluated in order."""
        backend = self.backend_url.rstrip("/")
        return [RewriteRule(source="/api/:path*", destination=f"{backend}/:path*")]

    def resolve_rewrite(self, path: str) -> Optional[str]:
        """
        Resolve the proxied URL for a storefront path.

        Args:
            path: Storefront request path

        Returns:
            Backend URL, or None if the path is served by the storefront
        """
        for rule in self.rewrites():
            rewritten = rule.apply(path)
            if rewritten is not None:
                return rewritten
        return None

    def is_image_allowed(self, image_url: str) -> bool:
        """
        Check whether an image URL is served from a permitted domain.

        Args:
            image_url: Absolute image URL

        Returns:
            True if the URL's host is in the allow-list
        """
        host = urlparse(image_url).hostname
        return host is not None and host in self.image_domains

    @property
    def public_env(self) -> Dict[str, str]:
        """Environment variables exposed to the browser bundle."""
        return {"NEXT_PUBLIC_MEDUSA_BACKEND_URL": self.backend_url}

    def to_dict(self) -> dict:
        """Render the configuration in the storefront's config layout."""
        return {
            "reactStrictMode": self.react_strict_mode,
            "images": {"domains": list(self.image_domains)},
            "rewrites": [
                {"source": rule.source, "destination": rule.destination}
                for rule in self.rewrites()
            ],
            "env": self.public_env,
        }


def build_storefront_config(settings: Settings) -> StorefrontConfig:
    """
    Build storefront configuration from settings.

    Args:
        settings: Application settings

    Returns:
        StorefrontConfig instance
    """
    return StorefrontConfig(
        backend_url=settings.NEXT_PUBLIC_MEDUSA_BACKEND_URL,
        image_domains=settings.image_domains,
    )
