"""Exit code mapping regression tests."""

from matlit.contracts.common import CyclicValueError, UnsupportedRankError
from matlit.engine.dispatcher import error_envelope, exit_code_for, serialize_error_envelope, success_envelope


def test_exit_code_success():
    assert exit_code_for(success_envelope("x", {})) == 0


def test_exit_code_validation_class():
    env = error_envelope("x", "ERR_CONFIG_INVALID", "bad config")
    assert exit_code_for(env) == 10


def test_exit_code_input_class():
    env = error_envelope("x", "ERR_INPUT_INVALID", "bad json")
    assert exit_code_for(env) == 20


def test_exit_code_cycle_class():
    env = serialize_error_envelope("x", CyclicValueError("loop", name="r.self"))
    assert exit_code_for(env) == 40
    assert env.errors[0].details == {"name": "r.self"}


def test_exit_code_io_class():
    env = error_envelope("x", "ERR_FILE_NOT_FOUND", "missing")
    assert exit_code_for(env) == 50
    env = error_envelope("x", "ERR_IO_WRITE", "disk full")
    assert exit_code_for(env) == 50


def test_exit_code_io_only_for_io_and_not_found():
    # Output files are overwritten, so there is no "already exists" error code.
    env = error_envelope("x", "ERR_FILE_EXISTS", "exists")
    assert exit_code_for(env) == 90


def test_exit_code_unsupported_class():
    env = serialize_error_envelope("x", UnsupportedRankError("3-D"))
    assert env.errors[0].code == "ERR_UNSUPPORTED_RANK"
    assert env.errors[0].details is None
    assert exit_code_for(env) == 70


def test_exit_code_internal_fallback():
    env = error_envelope("x", "ERR_SOMETHING_ELSE", "unknown")
    assert exit_code_for(env) == 90
