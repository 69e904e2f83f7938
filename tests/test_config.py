# =============================================================================
# test_config.py - Configuration Unit Tests
# =============================================================================
# Tests for LexerConfig defaults, environment overrides and the integer
# overflow policies.
# =============================================================================

import math
import sys

import pytest

from streamlex.config import INT64_MAX, INT64_MIN, LexerConfig, OverflowPolicy


ENV_VARS = (
    "STREAMLEX_CHUNK_SIZE",
    "STREAMLEX_ENCODING",
    "STREAMLEX_STRICT",
    "STREAMLEX_FLOATS",
    "STREAMLEX_OVERFLOW",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every STREAMLEX_* variable for the duration of a test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLexerConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = LexerConfig()
        assert config.chunk_size == 4096
        assert config.encoding == "utf-8"
        assert config.strict is False
        assert config.float_literals is True
        assert config.overflow is OverflowPolicy.ERROR
        assert config.first_line == 1

    def test_overflow_from_string(self):
        assert LexerConfig(overflow="WRAP").overflow is OverflowPolicy.WRAP

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            LexerConfig(chunk_size=0)

    def test_unknown_encoding(self):
        with pytest.raises(LookupError):
            LexerConfig(encoding="no-such-codec")


class TestFromEnv:
    """Test environment variable overrides."""

    def test_no_variables(self, clean_env):
        assert LexerConfig.from_env() == LexerConfig()

    def test_all_variables(self, clean_env):
        clean_env.setenv("STREAMLEX_CHUNK_SIZE", "16")
        clean_env.setenv("STREAMLEX_ENCODING", "latin-1")
        clean_env.setenv("STREAMLEX_STRICT", "yes")
        clean_env.setenv("STREAMLEX_FLOATS", "off")
        clean_env.setenv("STREAMLEX_OVERFLOW", "Saturate")

        config = LexerConfig.from_env()
        assert config.chunk_size == 16
        assert config.encoding == "latin-1"
        assert config.strict is True
        assert config.float_literals is False
        assert config.overflow is OverflowPolicy.SATURATE

    @pytest.mark.parametrize("name,value", [
        ("STREAMLEX_CHUNK_SIZE", "lots"),
        ("STREAMLEX_CHUNK_SIZE", "-4"),
        ("STREAMLEX_ENCODING", "klingon"),
        ("STREAMLEX_STRICT", "perhaps"),
        ("STREAMLEX_OVERFLOW", "explode"),
    ])
    def test_invalid_values_ignored(self, clean_env, name, value):
        clean_env.setenv(name, value)
        assert LexerConfig.from_env() == LexerConfig()


class TestOverflowPolicy:
    """Test how each policy treats values beyond int64."""

    def test_in_range_untouched(self):
        for policy in OverflowPolicy:
            assert policy.apply(INT64_MAX) == INT64_MAX
            assert policy.apply(0) == 0

    def test_error(self):
        assert OverflowPolicy.ERROR.apply(INT64_MAX + 1) is None

    def test_wrap(self):
        assert OverflowPolicy.WRAP.apply(INT64_MAX + 1) == INT64_MIN
        assert OverflowPolicy.WRAP.apply(2 ** 64 - 1) == -1

    def test_saturate(self):
        assert OverflowPolicy.SATURATE.apply(10 ** 30) == INT64_MAX

    def test_resolve_low_bits(self):
        assert OverflowPolicy.WRAP.resolve(5) == 5
        assert OverflowPolicy.WRAP.resolve(2 ** 64 - 2) == -2
        assert OverflowPolicy.SATURATE.resolve(5) == INT64_MAX
        assert OverflowPolicy.ERROR.resolve(5) is None

    def test_finite_float_untouched(self):
        for policy in OverflowPolicy:
            assert policy.apply_float(1.5) == 1.5
            assert policy.apply_float(sys.float_info.max) == sys.float_info.max

    def test_infinite_float(self):
        assert OverflowPolicy.ERROR.apply_float(math.inf) is None
        assert OverflowPolicy.WRAP.apply_float(math.inf) is None
        assert OverflowPolicy.SATURATE.apply_float(math.inf) == sys.float_info.max
