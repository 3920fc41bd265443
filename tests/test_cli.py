from pathlib import Path

from click.testing import CliRunner

from bramble import __version__
from bramble.build import BuildError, BuildResult
from bramble.cli import cli


def test_cli_new_scaffolds_project(tmp_path):
    runner = CliRunner()
    target = tmp_path / "mysite"
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code == 0
    assert "New Bramble site created" in result.output
    assert (target / "bramble.yaml").exists()
    assert (target / "templates" / "layout.html").exists()
    assert (target / "templates" / "post.html").exists()
    assert (target / "content" / "posts" / "welcome.md").exists()
    assert (target / "static" / "js" / "search.js").exists()
    assert sorted(p.name for p in target.iterdir()) == [
        "bramble.yaml",
        "content",
        "static",
        "templates",
    ]

    # fails on non-empty directory
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code != 0
    assert "non-empty directory" in result.output


def test_cli_build_scaffolded_project(monkeypatch, tmp_path):
    runner = CliRunner()
    project = tmp_path / "mysite"
    runner.invoke(cli, ["new", str(project)])
    monkeypatch.chdir(project)

    result = runner.invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Built 3 pages into" in result.output

    public = project / "public"
    welcome = (public / "posts" / "welcome.html").read_text(encoding="utf-8")
    assert "<title>Welcome to Bramble</title>" in welcome
    assert "<h1>Welcome</h1>" in welcome
    assert "<strong>content/posts</strong>" in welcome
    assert (public / "announcements" / "site-launch.html").exists()
    assert (public / "news.html").exists()
    assert (public / "index.html").exists()
    assert "<h2>About us</h2>" in (public / "about.html").read_text(encoding="utf-8")
    assert (public / "css" / "style.css").exists()


def test_cli_build_clean_flag(monkeypatch, tmp_path):
    calls = {}

    def fake_build_site(root, output_dir_override=None, clean_output=None):
        calls["clean_output"] = clean_output
        return BuildResult(pages=[], output_dir=root / "public", written=[])

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bramble.build.build_site", fake_build_site)
    runner = CliRunner()

    result = runner.invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert calls["clean_output"] is None
    assert "Built 0 pages" in result.output

    runner.invoke(cli, ["build", "--clean"], catch_exceptions=False)
    assert calls["clean_output"] is True


def test_cli_build_reports_build_error(monkeypatch, tmp_path):
    def failing_build_site(root, output_dir_override=None, clean_output=None):
        raise BuildError(root / "content" / "posts" / "bad.md", "File is not valid UTF-8")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bramble.build.build_site", failing_build_site)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert str(Path("content") / "posts" / "bad.md") in result.output
    assert "File is not valid UTF-8" in result.output


def test_cli_serve(monkeypatch, tmp_path):
    called = {}

    class DummyServer:
        def __init__(self, root, http_port=None):
            called["root"] = root
            called["port"] = http_port
            self.output_dir = root / "public"
            self.http_port = http_port or 4000

        def start(self):
            called["started"] = True

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bramble.server.PreviewServer", DummyServer)
    result = CliRunner().invoke(cli, ["serve", "--port", "5050"], catch_exceptions=False)
    assert result.exit_code == 0
    assert called["port"] == 5050
    assert called["started"] is True
    assert "http://localhost:5050" in result.output


def test_cli_serve_reports_build_error(monkeypatch, tmp_path):
    class FailingServer:
        def __init__(self, root, http_port=None):
            self.output_dir = root / "public"
            self.http_port = 4000

        def start(self):
            raise BuildError(Path.cwd() / "templates" / "layout.html", "Template not found")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bramble.server.PreviewServer", FailingServer)
    result = CliRunner().invoke(cli, ["serve"])
    assert result.exit_code == 1
    assert "Template not found" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_module_main_entrypoint():
    from bramble.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import bramble.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"] is True
