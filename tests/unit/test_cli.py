"""Tests for markstrip.cli -- end-to-end runs against a real git repository."""

import pytest

from markstrip import __version__
from markstrip.cli.app import build_parser, main
from markstrip.core.cleaner import MARKER

M = MARKER


# =========================================================================
# FIXTURES
# =========================================================================


@pytest.fixture
def project(git_workspace):
    files = {
        "app.py": f"x = 1  # {M} remove\ny = 2  # keep\n",
        "web/view.tsx": f"<div>{{/* {M} todo */}}</div>\n",
        "web/site.css": "a { color: red; }\n",
        "notes.md": f"# {M} markdown is not in the default set\n",
        "vendor/lib.py": f"z = 3  # {M}\n",
        "build/gen.py": f"w = 4  # {M}\n",
    }
    for rel, text in files.items():
        path = git_workspace / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    (git_workspace / ".gitignore").write_text("build/\n", encoding="utf-8")
    return git_workspace


def read(root, rel):
    return (root / rel).read_text(encoding="utf-8")


# =========================================================================
# PARSER
# =========================================================================


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.include is None
        assert args.exclude is None
        assert args.dry_run is False
        assert args.log_level == "INFO"

    def test_multiple_patterns(self):
        args = build_parser().parse_args(["-i", "*.py", "*.rs", "-e", "vendor/**"])
        assert args.include == ["*.py", "*.rs"]
        assert args.exclude == ["vendor/**"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


# =========================================================================
# RUNS
# =========================================================================


class TestMain:
    def test_default_run(self, project, capsys):
        assert main(["--path", str(project)]) == 0
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"
        assert read(project, "web/view.tsx") == "<div></div>\n"
        assert read(project, "vendor/lib.py") == "z = 3\n"
        # not in the default include set
        assert read(project, "notes.md") == f"# {M} markdown is not in the default set\n"
        # ignored by .gitignore
        assert read(project, "build/gen.py") == f"w = 4  # {M}\n"

        err = capsys.readouterr().err
        assert "Found 4 files to process..." in err
        assert "Cleaned" in err and "app.py" in err
        assert "Done." in err

    def test_from_subdirectory(self, project):
        assert main(["--path", str(project / "web")]) == 0
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"

    def test_exclude(self, project):
        assert main(["--path", str(project), "-e", "vendor/**"]) == 0
        assert read(project, "vendor/lib.py") == f"z = 3  # {M}\n"
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"

    def test_include_override(self, project):
        assert main(["--path", str(project), "-i", "*.md"]) == 0
        assert read(project, "notes.md") == "\n"
        assert read(project, "app.py").startswith(f"x = 1  # {M}")

    def test_dry_run(self, project, capsys):
        assert main(["--path", str(project), "--dry-run"]) == 0
        assert read(project, "app.py") == f"x = 1  # {M} remove\ny = 2  # keep\n"
        assert "Would clean" in capsys.readouterr().err

    def test_no_files(self, project, capsys):
        assert main(["--path", str(project), "-i", "*.nothing"]) == 0
        assert "No files found matching criteria." in capsys.readouterr().err

    def test_invalid_pattern_exits_nonzero(self, project, capsys):
        assert main(["--path", str(project), "-e", "[broken"]) == 1
        err = capsys.readouterr().err
        assert "Error listing files" in err and "[broken" in err
        assert read(project, "app.py") == f"x = 1  # {M} remove\ny = 2  # keep\n"

    def test_not_a_repository(self, tmp_path, monkeypatch, capsys, git):
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        plain = tmp_path / "plain"
        plain.mkdir()
        assert main(["--path", str(plain)]) == 1
        assert "Error finding git root" in capsys.readouterr().err

    def test_bad_file_does_not_fail_run(self, project, capsys):
        (project / "broken.py").write_bytes(b"\xff\xfe # \xff\n")
        assert main(["--path", str(project)]) == 0
        err = capsys.readouterr().err
        assert "broken.py" in err and "UTF-8" in err
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"

    def test_config_file(self, project):
        (project / ".markstrip.yaml").write_text(
            "include: ['*.py']\nexclude: ['vendor/**']\n", encoding="utf-8"
        )
        assert main(["--path", str(project)]) == 0
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"
        assert read(project, "vendor/lib.py") == f"z = 3  # {M}\n"
        assert read(project, "web/view.tsx") == f"<div>{{/* {M} todo */}}</div>\n"

    def test_explicit_config_and_custom_marker(self, project, tmp_path):
        (project / "todo.py").write_text("a = 1  # STRIPME\n", encoding="utf-8")
        config = tmp_path / "custom.yaml"
        config.write_text("include: ['todo.py']\nmarker: STRIPME\n", encoding="utf-8")
        assert main(["--path", str(project), "--config", str(config)]) == 0
        assert read(project, "todo.py") == "a = 1\n"

    def test_idempotent_second_run(self, project, capsys):
        main(["--path", str(project)])
        capsys.readouterr()
        main(["--path", str(project)])
        assert "Cleaned" not in capsys.readouterr().err

    def test_relative_log_file_lands_in_repo(self, project):
        (project / ".markstrip.yaml").write_text("log_file: .markstrip/run.log\n", encoding="utf-8")
        assert main(["--path", str(project / "web")]) == 0
        log_text = (project / ".markstrip" / "run.log").read_text(encoding="utf-8")
        assert "Found 4 files to process..." in log_text

    def test_ignored_nested_repository_untouched(self, project, git):
        (project / ".gitignore").write_text("build/\nthird_party/\n", encoding="utf-8")
        nested = project / "third_party"
        nested.mkdir()
        git(nested, "init", "-q")
        (nested / "dep.py").write_text(f"q = 1  # {M}\n", encoding="utf-8")

        assert main(["--path", str(project)]) == 0
        assert read(project, "third_party/dep.py") == f"q = 1  # {M}\n"
        assert read(project, "app.py") == "x = 1\ny = 2  # keep\n"

    def test_missing_explicit_config_exits_nonzero(self, project, capsys):
        assert main(["--path", str(project), "--config", str(project / "nope.yaml")]) == 1
        err = capsys.readouterr().err
        assert "Error loading config" in err and "nope.yaml" in err
        assert read(project, "app.py") == f"x = 1  # {M} remove\ny = 2  # keep\n"
