"""
Unit tests for storefront rewrite and image configuration.

Usage:
    pytest tests/unit/config/test_storefront_config.py -v
"""

import pytest

from boutique.config import (
    RewriteRule,
    Settings,
    StorefrontConfig,
    build_storefront_config,
)
from shared.tests.test_base import LaborantTest


class TestRewriteRule(LaborantTest):
    """Unit tests for RewriteRule matching."""

    component_name = "boutique"
    test_category = "unit"

    def test_catch_all_segment(self):
        """Test :path* captures the rest of the path."""
        self.reporter.info("Testing :path* rewrite", context="Test")

        rule = RewriteRule("/api/:path*", "http://backend:9000/:path*")

        assert rule.apply("/api/store/products") == (
            "http://backend:9000/store/products"
        )

    def test_bare_prefix_matches(self):
        """Test /api alone rewrites to the backend root."""
        rule = RewriteRule("/api/:path*", "http://backend:9000/:path*")

        assert rule.apply("/api") == "http://backend:9000/"
        assert rule.apply("/api/") == "http://backend:9000/"

    def test_query_string_preserved(self):
        rule = RewriteRule("/api/:path*", "http://backend:9000/:path*")

        assert rule.apply("/api/store/outfits?limit=5") == (
            "http://backend:9000/store/outfits?limit=5"
        )

    def test_single_segment_parameter(self):
        """Test :name matches exactly one segment."""
        rule = RewriteRule("/outfits/:id", "/store/outfits/:id")

        assert rule.apply("/outfits/abc") == "/store/outfits/abc"
        assert rule.apply("/outfits/abc/products") is None

    @pytest.mark.parametrize("path", ["/", "/products", "/apis/store", "/x/api/a"])
    def test_non_matching_paths(self, path):
        """Test paths outside /api are left to the storefront."""
        rule = RewriteRule("/api/:path*", "http://backend:9000/:path*")

        assert rule.apply(path) is None


class TestStorefrontConfig(LaborantTest):
    """Unit tests for StorefrontConfig."""

    component_name = "boutique"
    test_category = "unit"

    def setup_test(self):
        self.config = StorefrontConfig(
            backend_url="http://localhost:9000/",
            image_domains=["localhost", "boutique-media.s3.amazonaws.com"],
        )

    def test_single_api_rewrite(self):
        """Test exactly one /api/:path* rule pointing at the backend."""
        self.reporter.info("Testing rewrite list", context="Test")

        rewrites = self.config.rewrites()

        assert rewrites == [
            RewriteRule("/api/:path*", "http://localhost:9000/:path*")
        ]

    def test_resolve_rewrite(self):
        assert self.config.resolve_rewrite("/api/store/outfits") == (
            "http://localhost:9000/store/outfits"
        )
        assert self.config.resolve_rewrite("/collections/summer") is None

    def test_image_allow_list(self):
        """Test images load only from allow-listed hosts."""
        self.reporter.info("Testing image domains", context="Test")

        assert self.config.is_image_allowed(
            "https://boutique-media.s3.amazonaws.com/tee.jpg"
        )
        assert self.config.is_image_allowed("http://localhost:9000/uploads/a.png")
        assert not self.config.is_image_allowed("https://cdn.example.com/a.png")
        assert not self.config.is_image_allowed("not a url")

    def test_to_dict_layout(self):
        """Test rendered config uses the storefront's key names."""
        rendered = self.config.to_dict()

        assert rendered == {
            "reactStrictMode": True,
            "images": {
                "domains": ["localhost", "boutique-media.s3.amazonaws.com"]
            },
            "rewrites": [
                {
                    "source": "/api/:path*",
                    "destination": "http://localhost:9000/:path*",
                }
            ],
            "env": {"NEXT_PUBLIC_MEDUSA_BACKEND_URL": "http://localhost:9000/"},
        }

    def test_build_from_settings(self):
        """Test settings feed backend URL and image domains."""
        settings = Settings(
            NEXT_PUBLIC_MEDUSA_BACKEND_URL="https://api.shop.test",
            STOREFRONT_IMAGE_DOMAINS="localhost",
            S3_BUCKET="boutique-media",
        )

        config = build_storefront_config(settings)

        assert config.resolve_rewrite("/api/health") == (
            "https://api.shop.test/health"
        )
        assert config.image_domains == [
            "localhost",
            "boutique-media.s3.amazonaws.com",
        ]
