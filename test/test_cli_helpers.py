"""Tests for CLI file collection helpers."""
import pytest

from cli.helpers import collect_source_files, is_ignored, normalize_ignore_patterns, validate_environment


def _touch(root, *names):
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


class TestIgnorePatterns:
    def test_comma_separated_and_repeated(self, tmp_path):
        (tmp_path / "src").mkdir()
        patterns = normalize_ignore_patterns(["src,file.css", "./lib/"], str(tmp_path))
        assert patterns == ["src/**", "file.css", "lib/**"]

    def test_leading_slash_stripped(self, tmp_path):
        assert normalize_ignore_patterns(["/build"], str(tmp_path)) == ["build/**"]

    def test_existing_file_kept(self, tmp_path):
        _touch(tmp_path, "Makefile")
        assert normalize_ignore_patterns(["Makefile"], str(tmp_path)) == ["Makefile"]

    def test_blank_entries_skipped(self, tmp_path):
        assert normalize_ignore_patterns([" , ,"], str(tmp_path)) == []

    def test_glob_matching(self):
        assert is_ignored("node_modules/a/b.js", ["node_modules/**"])
        assert not is_ignored("src/node_modules.js", ["node_modules/**"])


class TestCollectSourceFiles:
    def test_directory_scan(self, tmp_path):
        _touch(tmp_path, "b.js", "a.css", "x/index.html", "x/m.mjs", "README.md", "dist/out.js")
        base_dir, files = collect_source_files(str(tmp_path))
        assert base_dir == str(tmp_path)
        assert files == ["a.css", "b.js", "x/index.html", "x/m.mjs"]

    def test_single_file(self, tmp_path):
        _touch(tmp_path, "one.js", "two.js")
        base_dir, files = collect_source_files(str(tmp_path / "one.js"))
        assert base_dir == str(tmp_path)
        assert files == ["one.js"]

    def test_single_unsupported_file(self, tmp_path):
        _touch(tmp_path, "notes.txt")
        assert collect_source_files(str(tmp_path / "notes.txt"))[1] == []

    def test_missing_path(self, tmp_path):
        assert collect_source_files(str(tmp_path / "nope"))[1] == []

    def test_manifest(self, tmp_path):
        _touch(tmp_path, "a.js", "b.js", "c.css")
        manifest = tmp_path / "manifest.txt"
        manifest.write_text("# selected files\nb.js\n\nc.css\nmissing.js\n", encoding="utf-8")
        _, files = collect_source_files(str(tmp_path), manifest=str(manifest))
        assert files == ["b.js", "c.css"]

    def test_user_ignore(self, tmp_path):
        _touch(tmp_path, "src/a.js", "src/inner/b.js", "c.js")
        _, files = collect_source_files(str(tmp_path), ignore=["src/inner"])
        assert files == ["c.js", "src/a.js"]


class TestValidateEnvironment:
    def test_summ_requires_url(self, capsys):
        with pytest.raises(SystemExit):
            validate_environment(require_summ=True)
        assert "SCANO_SUMM_URL not set" in capsys.readouterr().err

    def test_missing_registry_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCANO_REGISTRY", str(tmp_path / "none.json"))
        with pytest.raises(SystemExit):
            validate_environment()

    def test_ok(self, monkeypatch):
        monkeypatch.setenv("SCANO_SUMM_URL", "https://example.invalid/scan")
        validate_environment(require_summ=True)
