import pytest
from click.testing import CliRunner

from article_press import exporter
from article_press.cli import main
from article_press.extractors.fetcher import Fetcher

URL = "https://example.com/posts/my-post"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def offline_fetcher(monkeypatch, session):
    monkeypatch.setattr(exporter, "Fetcher", lambda: Fetcher(session=session))


def test_missing_url_is_usage_error(runner):
    result = runner.invoke(main, [])

    assert result.exit_code == 1
    assert "error: -url flag is required" in result.output
    assert "Usage:" in result.output


def test_markdown_export_prints_path(runner, article_site, tmp_path):
    out = tmp_path / "out"

    result = runner.invoke(main, ["-url", URL, "-out", str(out), "-format", "md"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(out / "My_Post.md")
    assert "sailing along the coast" in (out / "My_Post.md").read_text(encoding="utf-8")


def test_epub_is_the_default_format(runner, article_site, tmp_path):
    result = runner.invoke(main, ["--url", URL, "--out", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "My_Post.epub").is_file()


def test_no_images_flag(runner, article_site, tmp_path):
    result = runner.invoke(main, ["-url", URL, "-out", str(tmp_path), "--no-images"])

    assert result.exit_code == 0, result.output
    assert "https://example.com/img/a.jpg" not in article_site.calls


@pytest.mark.parametrize("output_format", ["markdown", "epub"])
def test_http_404_exits_1_without_output(runner, session, tmp_path, output_format):
    session.add(URL, b"not found", status_code=404)
    out = tmp_path / "out"

    result = runner.invoke(main, ["-url", URL, "-out", str(out), "-format", output_format])

    assert result.exit_code == 1
    assert "failed to fetch URL: unexpected HTTP status: 404" in result.output
    assert not out.exists() or list(out.iterdir()) == []


def test_invalid_url_exits_1(runner, tmp_path):
    result = runner.invoke(main, ["-url", "ftp://example.com/x", "-out", str(tmp_path)])

    assert result.exit_code == 1
    assert "invalid URL provided" in result.output


def test_config_file_sets_format(runner, article_site, tmp_path):
    config_file = tmp_path / "config.yml"
    config_file.write_text("default:\n  format: markdown\n", encoding="utf-8")
    out = tmp_path / "out"

    result = runner.invoke(main, ["-url", URL, "-out", str(out), "-c", str(config_file)])

    assert result.exit_code == 0, result.output
    assert (out / "My_Post.md").is_file()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output
