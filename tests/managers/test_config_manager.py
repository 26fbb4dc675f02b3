"""
Tests for YAML spring configuration loading.
"""

import textwrap

import pytest

from managers.config_manager import ConfigManager
from models.enums import SolverStrategy
from models.spring_config import BUILTIN_PRESETS, SpringConfig


def _write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def config_dir(tmp_path):
    _write(tmp_path / "defaults.yaml", """
        defaults:
          duration: 0.8
          bounce: 0
          properties: [transform, opacity]
          solver: damped-cosine
    """)
    _write(tmp_path / "presets.yaml", """
        presets:
          Snappy:
            stiffness: 400
            damping: 20
            colour: red
    """)
    _write(tmp_path / "spring.yaml", """
        include:
          - defaults.yaml
          - presets.yaml
    """)
    return tmp_path


def test_bundled_config_loads():
    manager = ConfigManager()
    manager.load()

    assert manager.defaults == SpringConfig()
    assert manager.presets == BUILTIN_PRESETS
    assert manager.warnings == []


def test_include_files_are_merged(config_dir):
    manager = ConfigManager(config_dir / "spring.yaml", config_dir / "missing.yaml")
    data = manager.load()

    assert set(data) == {"defaults", "presets"}
    assert manager.defaults.duration == 0.8
    assert manager.defaults.bounce == 0.0
    assert manager.defaults.properties == ("transform", "opacity")
    assert manager.defaults.solver is SolverStrategy.DAMPED_COSINE


def test_presets_parsed_with_lowercase_names(config_dir):
    manager = ConfigManager(config_dir / "spring.yaml", config_dir / "missing.yaml")
    manager.load()

    assert list(manager.presets) == ["snappy"]
    snappy = manager.presets["snappy"]
    assert snappy.stiffness == 400.0
    assert snappy.damping == 20.0
    assert snappy.bounce is None


def test_main_file_keys_win_over_includes(config_dir):
    _write(config_dir / "spring.yaml", """
        include:
          - defaults.yaml
        defaults:
          duration: 2
    """)
    manager = ConfigManager(config_dir / "spring.yaml", config_dir / "missing.yaml")
    manager.load()

    assert manager.defaults.duration == 2.0
    assert manager.defaults.properties == ("transform",)


def test_invalid_values_become_warnings(tmp_path):
    path = _write(tmp_path / "spring.yaml", """
        defaults:
          duration: -1
          mass: heavy
          damping: 4
        presets:
          odd:
            bounce: lots
    """)
    manager = ConfigManager(path, tmp_path / "missing.yaml")
    manager.load()

    assert manager.defaults.duration == SpringConfig().duration
    assert manager.defaults.mass == SpringConfig().mass
    assert manager.defaults.damping == 4.0
    assert {w.field for w in manager.warnings} == {"duration", "mass", "presets.odd.bounce"}
    assert manager.presets["odd"].bounce is None


def test_missing_presets_section_uses_builtin_table(tmp_path):
    path = _write(tmp_path / "spring.yaml", "defaults:\n  bounce: 0.1\n")
    manager = ConfigManager(path, tmp_path / "missing.yaml")
    manager.load()

    assert manager.presets == BUILTIN_PRESETS
    assert manager.defaults.bounce == 0.1


def test_missing_file_falls_back_to_factory_defaults(tmp_path):
    factory = _write(tmp_path / "factory.yaml", "defaults:\n  duration: 1.25\n")
    manager = ConfigManager(tmp_path / "nope.yaml", factory)
    manager.load()

    assert manager.defaults.duration == 1.25


def test_missing_include_falls_back_to_factory_defaults(tmp_path):
    path = _write(tmp_path / "spring.yaml", "include:\n  - gone.yaml\n")
    factory = _write(tmp_path / "factory.yaml", "defaults:\n  stiffness: 300\n")
    manager = ConfigManager(path, factory)
    manager.load()

    assert manager.defaults.stiffness == 300.0


def test_everything_missing_uses_builtin_constants(tmp_path):
    manager = ConfigManager(tmp_path / "nope.yaml", tmp_path / "also_nope.yaml")
    data = manager.load()

    assert data == {}
    assert manager.defaults == SpringConfig()
    assert manager.presets == BUILTIN_PRESETS


def test_non_mapping_file_is_rejected(tmp_path):
    path = _write(tmp_path / "spring.yaml", "- just\n- a list\n")
    manager = ConfigManager(path, tmp_path / "missing.yaml")
    manager.load()

    assert manager.data == {}
    assert manager.defaults == SpringConfig()
