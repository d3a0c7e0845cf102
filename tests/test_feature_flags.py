from feature_flags import (
    coerce_bool,
    get_event_log_feature,
    is_event_log_enabled,
    reload as reload_features,
)


def setup_function():
    reload_features()


def test_event_log_disabled_by_default():
    assert is_event_log_enabled({}) is False
    assert is_event_log_enabled({}, profile="dev") is False


def test_event_log_enabled_for_pilot_profile():
    assert is_event_log_enabled({}, profile="pilot") is True
    assert is_event_log_enabled({}, profile="PILOT") is True


def test_event_log_can_be_overridden_via_env():
    assert is_event_log_enabled({"CLI_SUDOKU_EVENT_LOG": "1"}, profile="prod") is True
    assert is_event_log_enabled({"SUDOKU_EVENT_LOG": "off"}, profile="pilot") is False
    assert is_event_log_enabled({"SUDOKU_EVENT_LOG": "maybe"}, profile="pilot") is True


def test_cli_env_key_wins_over_plain_env():
    env = {"CLI_SUDOKU_EVENT_LOG": "no", "SUDOKU_EVENT_LOG": "yes"}
    assert is_event_log_enabled(env, profile="dev") is False


def test_event_log_feature_merges_profile_overrides():
    assert get_event_log_feature("pilot")["dir"] == "logs/pilot"
    assert "dir" not in get_event_log_feature("prod")


def test_coerce_bool():
    assert coerce_bool(" TRUE ") is True
    assert coerce_bool("0") is False
    assert coerce_bool(False) is False
    assert coerce_bool(1) is None
    assert coerce_bool(None) is None
