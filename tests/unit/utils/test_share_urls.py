"""Unit tests for file share URL helpers and the share-path resolver."""

import pytest

from mathmd import render
from mathmd.options import RenderOptions
from mathmd.utils.share_urls import ShareUrlResolver, build_file_share_url, env_flag

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgo="


@pytest.mark.unit
class TestBuildFileShareUrl:
    """Tests for build_file_share_url."""

    def test_default_base(self):
        assert build_file_share_url("k1") == "/api/v1/files/share/k1"

    def test_absolute_base_with_trailing_slash(self):
        assert build_file_share_url("k1", "https://api.example.com/v1/") == "https://api.example.com/v1/files/share/k1"

    def test_key_is_percent_encoded(self):
        assert build_file_share_url("a/b c") == "/api/v1/files/share/a%2Fb%20c"

    def test_uri_component_safe_characters_kept(self):
        assert build_file_share_url("k!*'()") == "/api/v1/files/share/k!*'()"

    def test_key_is_trimmed(self):
        assert build_file_share_url("  k1  ") == "/api/v1/files/share/k1"

    @pytest.mark.parametrize("key", ["", "   ", None])
    def test_empty_key(self, key):
        assert build_file_share_url(key) == ""


@pytest.mark.unit
class TestEnvFlag:
    """Tests for boolean environment flags."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", " on "])
    def test_truthy(self, value):
        assert env_flag(value) is True

    @pytest.mark.parametrize("value", [None, "", "0", "false", "no", "off", "maybe"])
    def test_falsy(self, value):
        assert env_flag(value) is False


@pytest.mark.unit
class TestShareUrlResolver:
    """Tests for mapping author share paths to public URLs."""

    def test_api_share_path(self):
        resolver = ShareUrlResolver(api_base_url="https://api.example.com/v1")
        assert resolver("/api/v1/files/share/k1") == "https://api.example.com/v1/files/share/k1"

    def test_short_share_path(self):
        resolver = ShareUrlResolver(api_base_url="https://api.example.com/v1")
        assert resolver("/files/share/k1") == "https://api.example.com/v1/files/share/k1"

    def test_default_base_keeps_relative_route(self):
        assert ShareUrlResolver()("/files/share/k1") == "/api/v1/files/share/k1"

    def test_query_and_fragment_dropped(self):
        assert ShareUrlResolver()("/files/share/k1?download=1#top") == "/api/v1/files/share/k1"

    def test_percent_encoded_key_round_trips(self):
        assert ShareUrlResolver()("/files/share/a%20b") == "/api/v1/files/share/a%20b"

    def test_empty_key_passes_through(self):
        assert ShareUrlResolver()("/files/share/") == "/files/share/"

    @pytest.mark.parametrize("url", ["https://example.com/a.png", "/static/a.png", " javascript:x"])
    def test_other_urls_pass_through_unchanged(self, url):
        assert ShareUrlResolver()(url) == url

    def test_custom_prefixes(self):
        resolver = ShareUrlResolver(share_prefixes=("/uploads/",))
        assert resolver("/uploads/k1") == "/api/v1/files/share/k1"
        assert resolver("/files/share/k1") == "/files/share/k1"

    def test_empty_prefixes_rejected(self):
        with pytest.raises(ValueError):
            ShareUrlResolver(share_prefixes=())


@pytest.mark.unit
class TestMockMode:
    """Tests for the in-memory data URL registry."""

    def test_registered_key_resolves_to_data_url(self):
        resolver = ShareUrlResolver(mock_data_urls={"k1": PNG_DATA_URL})

        assert resolver.use_mock is True
        assert resolver("/files/share/k1") == PNG_DATA_URL

    def test_unregistered_key_uses_share_route(self):
        resolver = ShareUrlResolver(mock_data_urls={})
        assert resolver("/files/share/k2") == "/api/v1/files/share/k2"

    def test_register_and_get(self):
        resolver = ShareUrlResolver(mock_data_urls={})
        resolver.register_mock_data_url("k3", PNG_DATA_URL)

        assert resolver.get_mock_data_url("k3") == PNG_DATA_URL
        assert resolver.to_public_url("k3") == PNG_DATA_URL

    def test_register_requires_mock_mode(self):
        resolver = ShareUrlResolver()

        assert resolver.use_mock is False
        with pytest.raises(RuntimeError):
            resolver.register_mock_data_url("k1", PNG_DATA_URL)

    def test_registry_is_copied(self):
        registry = {"k1": PNG_DATA_URL}
        resolver = ShareUrlResolver(mock_data_urls=registry)
        registry["k1"] = "data:image/gif;base64,AAAA"

        assert resolver.get_mock_data_url("k1") == PNG_DATA_URL


@pytest.mark.unit
class TestFromEnv:
    """Tests for environment-driven construction."""

    def test_defaults(self):
        resolver = ShareUrlResolver.from_env(environ={})

        assert resolver.api_base_url == "/api/v1"
        assert resolver.use_mock is False

    def test_explicit_environ(self):
        resolver = ShareUrlResolver.from_env(
            mock_data_urls={"k1": PNG_DATA_URL},
            environ={"MATHMD_API_BASE_URL": "https://api.example.com/v1", "MATHMD_USE_MOCK": "true"},
        )

        assert resolver.api_base_url == "https://api.example.com/v1"
        assert resolver("/files/share/k1") == PNG_DATA_URL

    def test_registry_ignored_outside_mock_mode(self):
        resolver = ShareUrlResolver.from_env(mock_data_urls={"k1": PNG_DATA_URL}, environ={})
        assert resolver("/files/share/k1") == "/api/v1/files/share/k1"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("MATHMD_API_BASE_URL", "https://env.example.com/api")
        monkeypatch.setenv("MATHMD_USE_MOCK", "1")

        resolver = ShareUrlResolver.from_env()

        assert resolver.api_base_url == "https://env.example.com/api"
        assert resolver.use_mock is True


@pytest.mark.unit
class TestResolverInRender:
    """Tests for the resolver plugged into rendering."""

    def test_share_image_resolved(self):
        options = RenderOptions(resolve_image_url=ShareUrlResolver(api_base_url="https://api.example.com/v1"))

        html = render("![fig](/api/v1/files/share/k1)", options)

        assert 'src="https://api.example.com/v1/files/share/k1"' in html

    def test_mock_png_data_url_rendered(self):
        options = RenderOptions(resolve_image_url=ShareUrlResolver(mock_data_urls={"k1": PNG_DATA_URL}))

        html = render("![fig](/files/share/k1)", options)

        assert f'src="{PNG_DATA_URL}"' in html

    def test_mock_svg_data_url_still_refused(self):
        resolver = ShareUrlResolver(mock_data_urls={"k1": "data:image/svg+xml;base64,PHN2Zz4="})

        html = render("![fig](/files/share/k1)", RenderOptions(resolve_image_url=resolver))

        assert "<img" not in html
        assert "[image: fig]" in html
