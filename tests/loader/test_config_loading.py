"""Tests for loading Session configuration from YAML and env."""

import sys
from pathlib import Path

import pytest

from halfwit.core.config import Session
from halfwit.core.yaml_settings import YamlWithIncludesSettingsSource


@pytest.fixture
def workdir(tmp_path, monkeypatch, mock_argv):
    """Empty working directory with no halfwit.yaml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_load(workdir):
    session = Session()

    bisect = session.config.bisect
    assert bisect.backup_dir == Path(".halfwit")
    assert bisect.shell is None
    assert bisect.timeout is None
    assert bisect.verify_baseline is True
    assert bisect.single_culprit is False


def test_output_dir_template_is_substituted(workdir):
    session = Session()

    output_dir = session.config.bisect.output_dir
    assert "{config" not in str(output_dir)
    assert output_dir == session.config.log_root / "tests"


def test_project_file_overrides_defaults(workdir):
    (workdir / "halfwit.yaml").write_text("""
config:
  bisect:
    timeout: 30
    shell: bash
""")

    bisect = Session().config.bisect

    assert bisect.timeout == 30
    assert bisect.shell == "bash"
    assert bisect.verify_baseline is True


def test_config_templates_reference_other_fields(workdir):
    (workdir / "halfwit.yaml").write_text(f"""
config:
  log_root: {workdir / "logs"}
  bisect:
    output_dir: "{{config.log_root}}/custom"
""")

    session = Session()

    assert session.config.bisect.output_dir == workdir / "logs" / "custom"


def test_unknown_template_left_unchanged(workdir):
    (workdir / "halfwit.yaml").write_text("""
config:
  bisect:
    name: "{config.nothing_here}"
""")

    assert Session().config.bisect.name == "{config.nothing_here}"


def test_include_directive_merges(workdir):
    (workdir / "extra.yaml").write_text("""
config:
  bisect:
    single_culprit: true
    timeout: 5
""")
    (workdir / "halfwit.yaml").write_text("""
include: extra.yaml
config:
  bisect:
    timeout: 10
""")

    bisect = Session().config.bisect

    assert bisect.single_culprit is True
    # The including file wins over the included one
    assert bisect.timeout == 10


def test_nested_include_relative_to_including_file(workdir):
    sub = workdir / "sub"
    sub.mkdir()
    (sub / "inner.yaml").write_text("""
config:
  bisect:
    shell: zsh
""")
    (sub / "outer.yaml").write_text("include: inner.yaml\n")
    (workdir / "halfwit.yaml").write_text("include: sub/outer.yaml\n")

    assert Session().config.bisect.shell == "zsh"


def test_circular_include_detected(workdir):
    (workdir / "a.yaml").write_text("include: b.yaml\n")
    (workdir / "b.yaml").write_text("include: a.yaml\n")

    with pytest.raises(ValueError, match="Circular include"):
        YamlWithIncludesSettingsSource(
            Session, yaml_file=str(workdir / "a.yaml")
        )


def test_missing_include_raises(workdir):
    (workdir / "halfwit.yaml").write_text("include: nonexistent.yaml\n")

    with pytest.raises(FileNotFoundError):
        YamlWithIncludesSettingsSource(Session)


def test_cli_include_argument(workdir):
    extra = workdir / "cli.yaml"
    extra.write_text("""
config:
  bisect:
    timeout: 99
""")
    sys.argv = ["halfwit", "--include", str(extra)]

    data = YamlWithIncludesSettingsSource(Session)()

    assert data["config"]["bisect"]["timeout"] == 99


def test_environment_overrides_yaml(workdir, monkeypatch):
    (workdir / "halfwit.yaml").write_text("""
config:
  bisect:
    timeout: 30
""")
    monkeypatch.setenv("HALFWIT_CONFIG__BISECT__TIMEOUT", "45")

    assert Session().config.bisect.timeout == 45


def test_package_defaults_file_is_found(workdir):
    """default.yaml ships inside the halfwit package and is read."""
    import halfwit.core.yaml_settings as yaml_settings

    defaults = (
        Path(yaml_settings.__file__).parent.parent / "defaults" / "default.yaml"
    )
    assert defaults.is_file()

    file_sink = Session().config.logger.file
    assert file_sink.format_template.startswith("{timestamp:")
