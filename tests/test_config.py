import pytest

from inkwell.config import DEFAULT_CONFIG, SiteConfig, load_config
from inkwell.errors import ConfigError


def test_defaults_without_config_file(tmp_path):
    config = load_config(tmp_path)
    assert config.project_root == tmp_path
    assert config.content_dir == tmp_path / "posts"
    assert config.templates_dir == tmp_path / "templates"
    assert config.output_dir == tmp_path / "public"
    assert config.content_extension == ".md"
    assert config.output_extension == ".html"
    assert config.index_path == tmp_path / "public" / "index.html"
    assert config.output_path_for("hello-world") == tmp_path / "public" / "hello-world.html"
    assert config.strict_templates is DEFAULT_CONFIG["strict_templates"]


def test_config_file_overrides_defaults(tmp_path):
    (tmp_path / "inkwell.yaml").write_text(
        "content_dir: content\noutput_dir: site/out\nstrict_templates: true\nunknown: 1\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.content_dir == tmp_path / "content"
    assert config.output_dir == tmp_path / "site" / "out"
    assert config.templates_dir == tmp_path / "templates"
    assert config.strict_templates is True


def test_absolute_directories_are_kept(tmp_path):
    elsewhere = tmp_path / "elsewhere"
    config = SiteConfig.for_project(tmp_path / "project", output_dir=str(elsewhere))
    assert config.output_dir == elsewhere


def test_empty_config_file_uses_defaults(tmp_path):
    (tmp_path / "inkwell.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path) == SiteConfig.for_project(tmp_path)


@pytest.mark.parametrize("text", ["content_dir: [oops\n", "- a\n- b\n"])
def test_malformed_config_file(tmp_path, text):
    (tmp_path / "inkwell.yaml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
