"""
Logger output format, level filtering and singleton behaviour.
"""

from models.enums import LogCategory, LogLevel
from utils.logger import configure_logger, get_category_logger, get_logger


def test_logger_is_singleton():
    original = get_logger()
    configure_logger(LogLevel.DEBUG, use_colors=False)
    assert get_logger() is original
    assert get_logger().min_level == LogLevel.DEBUG


def test_message_with_details(capsys):
    log = get_category_logger(LogCategory.SESSION)
    log.info("Spring settled on card", slot="default", frames=31)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert "SESSION" in lines[0]
    assert lines[0].endswith("✓ Spring settled on card")
    assert lines[1].strip() == "├─ slot: default"
    assert lines[2].strip() == "└─ frames: 31"


def test_level_filtering(capsys):
    log = get_category_logger(LogCategory.CONFIG)
    log.debug("hidden")
    log.warn("Unknown preset", preset="wobbly")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "⚠ Unknown preset" in out
    assert "└─ preset: wobbly" in out


def test_debug_shown_when_enabled(capsys):
    configure_logger(LogLevel.DEBUG, use_colors=False)
    get_category_logger(LogCategory.TRACKER).debug("baseline recorded")
    assert "baseline recorded" in capsys.readouterr().out


def test_bound_logger_category_override(capsys):
    log = get_category_logger(LogCategory.SOLVER)
    log.error("overflow", category=LogCategory.SYSTEM)

    out = capsys.readouterr().out
    assert "SYSTEM" in out
    assert "SOLVER" not in out


def test_colors_disabled_emit_no_escape_codes(capsys):
    get_category_logger(LogCategory.BEZIER).info("curve cached")
    assert "\033[" not in capsys.readouterr().out


def test_spring_helpers(capsys):
    logger = get_logger()
    logger.spring_started("card", "default", duration="0.5s")
    logger.spring_settled("card", "default", frames=31)

    out = capsys.readouterr().out
    assert "SESSION" in out
    assert "✓ Started spring on card" in out
    assert "✓ Spring settled on card" in out
    assert "└─ frames: 31" in out


def test_config_warning(capsys):
    get_logger().config_warning("preset", "wobbly", "unknown preset, using default values")

    lines = capsys.readouterr().out.splitlines()
    assert "CONFIG" in lines[0]
    assert lines[0].endswith("⚠ Configuration warning: unknown preset, using default values")
    assert lines[1].strip() == "├─ field: preset"
    assert lines[2].strip() == "└─ value: 'wobbly'"
