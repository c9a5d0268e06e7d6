"""Integration tests for the CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdblog.cli.cli import app


@pytest.fixture(name="runner")
def runner_fixture():
    return CliRunner()


def _invoke(runner, content_dir, *args):
    return runner.invoke(app, [*args, "--content-dir", str(content_dir)])


def test_render_prints_html(runner, content_dir):
    result = _invoke(runner, content_dir, "render", "feature-showcase")
    assert result.exit_code == 0, result.output
    assert '<h2 id="setup"><a href="#setup" class="anchor-link">Setup</a></h2>' in result.output
    assert 'class="mermaid-placeholder"' in result.output


def test_render_json(runner, content_dir):
    result = _invoke(runner, content_dir, "render", "short-note", "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["meta"]["slug"] == "short-note"
    assert data["content_html"] == "<p>Just a few words.</p>\n"
    assert data["headings"] == []


def test_render_missing_post(runner, content_dir):
    result = _invoke(runner, content_dir, "render", "nope")
    assert result.exit_code == 1
    assert "No blog post named 'nope'" in result.output


def test_render_content_dir_from_env(runner, content_dir, monkeypatch):
    monkeypatch.setenv("MDBLOG_CONTENT_DIR", str(content_dir))
    result = runner.invoke(app, ["render", "short-note"])
    assert result.exit_code == 0, result.output


def test_toc(runner, content_dir):
    result = _invoke(runner, content_dir, "toc", "feature-showcase")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "Feature Showcase (1 min read)",
        "- Setup  #setup",
        "  - Install  #install",
        "- Diagrams  #diagrams",
        "- Setup  #setup-2",
    ]


def test_toc_notes_hidden_outline(runner, content_dir):
    result = _invoke(runner, content_dir, "toc", "short-note")
    assert result.exit_code == 0, result.output
    assert "fewer than 3 headings" in result.output


def test_list(runner, content_dir):
    result = _invoke(runner, content_dir, "list")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "2024-03-01  feature-showcase  Feature Showcase",
        "2024-01-15  short-note  Short Note",
    ]


def test_list_empty(runner, content_dir):
    result = _invoke(runner, content_dir, "list", "--type", "til")
    assert result.exit_code == 1
    assert "No til posts found" in result.output


def test_list_unknown_type(runner, content_dir):
    result = _invoke(runner, content_dir, "list", "-t", "news")
    assert result.exit_code == 1
    assert "Unknown content type 'news'" in result.output


def test_new_twice(runner, content_dir, tmp_path):
    body = tmp_path / "body.md"
    body.write_text("## Hi\n\nFirst words.\n")
    args = ["new", "Hello World", "--body-file", str(body), "--tag", "intro", "--type", "til"]

    first = _invoke(runner, content_dir, *args)
    second = _invoke(runner, content_dir, *args)
    assert first.exit_code == 0, first.output
    assert "Created til post: hello-world" in first.output
    assert "Created til post: hello-world-1" in second.output
    assert (content_dir / "til" / "hello-world-1.md").is_file()

    rendered = _invoke(runner, content_dir, "render", "hello-world", "-t", "til", "--json")
    assert json.loads(rendered.output)["meta"]["tags"] == ["intro"]


def test_new_rejects_empty_body(runner, content_dir, tmp_path):
    body = tmp_path / "empty.md"
    body.write_text("")
    result = _invoke(runner, content_dir, "new", "Empty", "--body-file", str(body))
    assert result.exit_code == 1
    assert "Invalid post" in result.output
    assert not (content_dir / "blog" / "empty.md").exists()
