import os
from pathlib import Path

import pytest

from xvn.plugins.mock import MockPlugin
from xvn.version_file.finder import (
    VersionFile,
    VersionFileError,
    VersionFileSource,
    detect_source,
    parse_version_file,
)


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    resolved = tmp_path.resolve()
    monkeypatch.setenv("HOME", str(resolved))
    return resolved


def test_parse_simple_version(home):
    path = home / ".nvmrc"
    path.write_text("18.20.0")
    assert parse_version_file(path) == "18.20.0"


def test_parse_version_with_whitespace(home):
    path = home / ".nvmrc"
    path.write_text("  18.20.0  \n\n")
    assert parse_version_file(path) == "18.20.0"


def test_parse_version_with_comments(home):
    path = home / ".nvmrc"
    path.write_text("# This is a comment\n18.20.0")
    assert parse_version_file(path) == "18.20.0"


def test_parse_lts_version(home):
    path = home / ".nvmrc"
    path.write_text("lts/hydrogen")
    assert parse_version_file(path) == "lts/hydrogen"


def test_parse_empty_file(home):
    path = home / ".nvmrc"
    path.write_text("")
    with pytest.raises(VersionFileError, match="empty"):
        parse_version_file(path)


def test_parse_missing_file(home):
    with pytest.raises(VersionFileError, match="failed to read"):
        parse_version_file(home / "missing")


@pytest.mark.parametrize(
    ("name", "source"),
    [
        (".nvmrc", VersionFileSource.NVMRC),
        (".node-version", VersionFileSource.NODE_VERSION),
        ("package.json", VersionFileSource.PACKAGE_JSON),
        (".tool-versions", VersionFileSource.TOOL_VERSIONS),
        (".something", VersionFileSource.OTHER),
    ],
)
def test_detect_source(name, source):
    assert detect_source(name) is source


def test_find_version_file_in_current_dir(home):
    version_file = home / ".nvmrc"
    version_file.write_text("18.20.0")
    found = VersionFile.find(home, [".nvmrc"])
    assert found is not None
    assert found.version == "18.20.0"
    assert found.path == version_file.resolve()
    assert found.source is VersionFileSource.NVMRC


def test_find_version_file_in_parent_dir(home):
    (home / ".nvmrc").write_text("18.20.0")
    subdir = home / "subdir"
    subdir.mkdir()
    found = VersionFile.find(subdir, [".nvmrc"])
    assert found is not None
    assert found.version == "18.20.0"


def test_find_no_version_file(home):
    assert VersionFile.find(home, [".nvmrc"]) is None


def test_find_empty_version_file_raises(home):
    (home / ".nvmrc").write_text("\n# only a comment\n")
    with pytest.raises(VersionFileError, match="failed to parse version file"):
        VersionFile.find(home, [".nvmrc"])


def test_find_missing_start_dir_raises(home):
    with pytest.raises(VersionFileError, match="canonicalize"):
        VersionFile.find(home / "does-not-exist", [".nvmrc"])


def test_find_respects_priority_order(home):
    (home / ".nvmrc").write_text("18.20.0")
    (home / ".node-version").write_text("20.0.0")
    found = VersionFile.find(home, [".nvmrc", ".node-version"])
    assert found.version == "18.20.0"


def test_find_package_json_with_engines(home):
    (home / "package.json").write_text(
        '{"name": "test-app", "engines": {"node": ">=18.0.0"}}'
    )
    found = VersionFile.find(home, ["package.json"])
    assert found.version == ">=18.0.0"
    assert found.source is VersionFileSource.PACKAGE_JSON


def test_find_package_json_without_engines(home):
    (home / "package.json").write_text('{"name": "test-app", "version": "1.0.0"}')
    assert VersionFile.find(home, ["package.json"]) is None


def test_find_invalid_package_json_is_skipped(home):
    (home / "package.json").write_text("{ invalid json }")
    (home / ".nvmrc").write_text("16.0.0")
    found = VersionFile.find(home, ["package.json", ".nvmrc"])
    assert found.version == "16.0.0"
    assert found.source is VersionFileSource.NVMRC


def test_priority_nvmrc_over_package_json(home):
    (home / ".nvmrc").write_text("18.20.0")
    (home / "package.json").write_text('{"engines": { "node": ">=20.0.0" }}')
    found = VersionFile.find(home, [".nvmrc", "package.json"])
    assert found.version == "18.20.0"
    assert found.source is VersionFileSource.NVMRC


def test_package_json_priority_over_nvmrc(home):
    (home / ".nvmrc").write_text("18.20.0")
    (home / "package.json").write_text('{"engines": { "node": ">=20.0.0" }}')
    found = VersionFile.find(home, ["package.json", ".nvmrc"])
    assert found.version == ">=20.0.0"
    assert found.source is VersionFileSource.PACKAGE_JSON


def test_version_file_with_v_prefix_preserved(home):
    (home / ".nvmrc").write_text("v18.20.0\n")
    assert VersionFile.find(home, [".nvmrc"]).version == "v18.20.0"


def test_version_file_node_prefix(home):
    (home / ".nvmrc").write_text("node/18.20.0\n")
    assert VersionFile.find(home, [".nvmrc"]).version == "node/18.20.0"


def test_version_file_multiline_uses_first_non_comment(home):
    (home / ".nvmrc").write_text("18.20.0\n20.0.0\n21.0.0\n")
    assert VersionFile.find(home, [".nvmrc"]).version == "18.20.0"


def test_version_file_with_leading_empty_lines(home):
    (home / ".nvmrc").write_text("\n\n18.20.0\n")
    assert VersionFile.find(home, [".nvmrc"]).version == "18.20.0"


def test_version_file_with_trailing_whitespace_and_newlines(home):
    (home / ".nvmrc").write_text("18.20.0  \n\n\n")
    assert VersionFile.find(home, [".nvmrc"]).version == "18.20.0"


def test_version_file_follows_symlinks(home):
    real_dir = home / "real"
    real_dir.mkdir()
    (real_dir / ".nvmrc").write_text("18.20.0\n")
    link_dir = home / "link"
    os.symlink(real_dir, link_dir)
    found = VersionFile.find(link_dir, [".nvmrc"])
    assert found.version == "18.20.0"


def test_version_file_deeply_nested_search(home):
    (home / ".nvmrc").write_text("18.20.0\n")
    nested = home.joinpath(*(f"level{i}" for i in range(10)))
    nested.mkdir(parents=True)
    assert VersionFile.find(nested, [".nvmrc"]).version == "18.20.0"


def test_version_file_priority_order_node_version_first(home):
    (home / ".nvmrc").write_text("18.20.0\n")
    (home / ".node-version").write_text("20.0.0\n")
    found = VersionFile.find(home, [".node-version", ".nvmrc"])
    assert found.version == "20.0.0"
    assert found.source is VersionFileSource.NODE_VERSION


@pytest.mark.parametrize(
    "version",
    [
        "18.20.0",
        "v18.20.0",
        "lts/hydrogen",
        "lts/*",
        "node",
        "stable",
        "18",
        "18.20",
        "iojs",
        "iojs-v3.3.1",
    ],
)
def test_version_file_complex_version_string(home, version):
    (home / ".nvmrc").write_text(f"{version}\n")
    assert VersionFile.find(home, [".nvmrc"]).version == version


def test_version_file_with_inline_comment(home):
    (home / ".nvmrc").write_text("18.20.0 # This is my version\n")
    found = VersionFile.find(home, [".nvmrc"])
    assert found.version == "18.20.0 # This is my version"


def test_version_file_struct_equality(home):
    path = home / ".nvmrc"
    vf1 = VersionFile(path, "18.20.0", VersionFileSource.NVMRC)
    vf2 = VersionFile(Path(path), "18.20.0", VersionFileSource.NVMRC)
    assert vf1 == vf2
    assert vf1 != VersionFile(path, "20.0.0", VersionFileSource.NVMRC)


def test_e2e_simple_activation(home):
    (home / ".nvmrc").write_text("18.20.0\n")
    plugins = [MockPlugin("nvm").with_version("18.20.0").with_availability(True)]

    found_file = VersionFile.find(home, [".nvmrc"])
    assert found_file.version == "18.20.0"

    plugin = next(
        p for p in plugins if p.is_available() and p.has_version(found_file.version)
    )
    assert plugin.name == "nvm"
    assert plugin.activate_command(found_file.version) == "nvm use 18.20.0"


def test_e2e_version_not_installed(home):
    (home / ".nvmrc").write_text("99.99.99\n")
    plugin = MockPlugin("nvm").with_version("18.20.0").with_availability(True)
    found_file = VersionFile.find(home, [".nvmrc"])
    assert found_file.version == "99.99.99"
    assert plugin.has_version(found_file.version) is False


def test_e2e_nested_directory_search(home):
    (home / ".nvmrc").write_text("20.0.0\n")
    nested = home / "src" / "components"
    nested.mkdir(parents=True)
    assert VersionFile.find(nested, [".nvmrc"]).version == "20.0.0"