import logging

import pytest

from config.Config import Config
import logs.logger as loggerModule
import main

TEST_ENV = {
    'OKX_API_KEY': 'test-key',
    'OKX_SECRET_KEY': 'test-secret',
    'OKX_PASSPHRASE': 'test-passphrase',
    'TELEGRAM_BOT_TOKEN': '123:abc',
    'TELEGRAM_CHAT_ID': '-100200300',
}


def test_missing_configuration_exits_with_error(monkeypatch):
    monkeypatch.setattr(main, 'get_config', lambda: Config(environ={}))
    built = []
    monkeypatch.setattr(main, 'build_signal_scheduler', built.append)

    assert main.main(['--once']) == 1
    assert built == []


def test_once_runs_a_single_cycle(monkeypatch):
    class FakeSignalScheduler:
        cycles = 0

        def runCycle(self):
            self.cycles += 1

    fake = FakeSignalScheduler()
    monkeypatch.setattr(main, 'get_config', lambda: Config(environ=dict(TEST_ENV)))
    monkeypatch.setattr(main, 'build_signal_scheduler', lambda config: fake)

    assert main.main(['--once']) == 0
    assert fake.cycles == 1


def test_parse_args():
    args = main.parse_args(['--once', '--log-level', 'debug'])
    assert args.once
    assert args.log_level == 'debug'


@pytest.fixture
def isolatedLogging(monkeypatch):
    """Drops LOG_* from the environment and undoes any file handler added by main()"""
    for key in ('LOG_FILE', 'LOG_LEVEL'):
        # setenv first so the value loaded from .env is removed again on teardown
        monkeypatch.setenv(key, '')
        monkeypatch.delenv(key)
    monkeypatch.setattr(loggerModule, '_fileHandler', None)

    rootLogger = logging.getLogger()
    handlers = list(rootLogger.handlers)
    level = rootLogger.level
    yield
    for handler in rootLogger.handlers:
        if handler not in handlers:
            rootLogger.removeHandler(handler)
            handler.close()
    rootLogger.setLevel(level)


def test_logging_settings_from_env_file_are_applied(tmp_path, monkeypatch, isolatedLogging):
    logFile = tmp_path / 'logs' / 'monitor.log'
    (tmp_path / '.env').write_text(f"LOG_FILE={logFile}\nLOG_LEVEL=DEBUG\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main, 'get_config', lambda: Config(environ={}))

    assert main.main(['--once']) == 1

    assert logFile.exists()
    assert 'Configuration error' in logFile.read_text()
    assert logging.getLogger().level == logging.DEBUG


def test_explicit_configure_attaches_file_handler(tmp_path, isolatedLogging):
    logFile = tmp_path / 'explicit.log'

    loggerModule.configure_logging(level='INFO', logFile=str(logFile))
    loggerModule.get_logger('tests.explicit').info('written to file')

    assert 'written to file' in logFile.read_text()
