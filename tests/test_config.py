import pytest

from config.Config import Config
from config.TrackedTokens import DEFAULT_TRACKED_TOKENS, parseTrackedTokens
from utils.Exceptions import ConfigurationError


def test_defaults(config):
    config.validate()
    assert config.OKX_BASE_URL == 'https://web3.okx.com'
    assert config.CHAIN_INDEX == '56'
    assert config.CANDLE_GRANULARITY == '5m'
    assert config.CANDLE_WINDOW_SIZE == 144
    assert config.ALIGNMENT_HISTORY_SIZE == 10
    assert config.POLL_INTERVAL_MINUTES == 5
    assert not config.isAlignedSchedule
    assert config.TRACKED_TOKENS == DEFAULT_TRACKED_TOKENS


def test_missing_credentials_are_reported():
    config = Config(environ={'OKX_API_KEY': 'key', 'TELEGRAM_CHAT_ID': ''})

    with pytest.raises(ConfigurationError) as excinfo:
        config.validate()

    assert excinfo.value.missingKeys == [
        'OKX_SECRET_KEY', 'OKX_PASSPHRASE', 'TELEGRAM_BOT_TOKEN', 'TELEGRAM_CHAT_ID'
    ]


def test_invalid_number_is_rejected(configFactory):
    with pytest.raises(ConfigurationError, match='POLL_INTERVAL_MINUTES'):
        configFactory(POLL_INTERVAL_MINUTES='five')


@pytest.mark.parametrize("overrides", [
    {'CANDLE_WINDOW_SIZE': 100},
    {'POLL_INTERVAL_MINUTES': 0},
    {'POLL_ALIGN_SECOND': 60},
    {'ALIGNMENT_HISTORY_SIZE': 0},
    {'POLL_INTERVAL_MINUTES': 90, 'POLL_ALIGN_SECOND': 5},
    {'POLL_INTERVAL_MINUTES': 7, 'POLL_ALIGN_SECOND': 5},
])
def test_out_of_range_values(configFactory, overrides):
    with pytest.raises(ConfigurationError):
        configFactory(**overrides).validate()


def test_aligned_schedule(configFactory):
    config = configFactory(POLL_ALIGN_SECOND=10)
    config.validate()
    assert config.isAlignedSchedule


def test_tracked_tokens_override(configFactory):
    config = configFactory(TRACKED_TOKENS=' 0xAbc , 0xdef,0xABC ,, ')
    assert config.TRACKED_TOKENS == ['0xAbc', '0xdef']


def test_parse_tracked_tokens_empty():
    assert parseTrackedTokens('') == []
    assert parseTrackedTokens(None) == []


@pytest.mark.parametrize("interval", [7, 90])
def test_uneven_interval_allowed_without_alignment(configFactory, interval):
    configFactory(POLL_INTERVAL_MINUTES=interval).validate()
