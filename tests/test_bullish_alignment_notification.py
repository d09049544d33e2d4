import requests

from constants.BullishAlignmentConstants import BullishAlignmentUrls
from models.Signal import BullishAlignmentSignal
from models.TokenInfo import TokenInfo
from notification.handlers.BullishAlignmentNotification import BullishAlignmentNotification
from notification.MessageFormat import CommonMessage, MessageButton
from notification.NotificationManager import NotificationService
from notification.NotificationType import NotificationType
from utils.CommonUtil import CommonUtil

TOKEN = '0x0E09FaBB73Bd3Ade0a17ECC321fD13a19e81cE82'


def _signal(price=2.5):
    return BullishAlignmentSignal(
        tokenAddress=TOKEN,
        currentPrice=price,
        ema21=2.4,
        ema55=2.2,
        ema144=0.95,
        candleTimestamp=1700000100000,
        detectedAt=1700000400,
    )


class FakeResponse:
    def __init__(self, body, statusCode=200):
        self.body = body
        self.status_code = statusCode

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.body


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class RecordingService:
    def __init__(self):
        self.sent = []

    def sendNotification(self, chatId, notificationType, commonMessage):
        self.sent.append((chatId, notificationType, commonMessage))
        return True


def test_format_number():
    assert CommonUtil.formatNumber(2.5) == '2.500000'
    assert CommonUtil.formatNumber(1) == '1.000000'
    assert CommonUtil.formatNumber(0.000123) == '0.00012300'


def test_format_unix_time_in_timezone():
    assert CommonUtil.formatUnixTime(0) == '1970-01-01 00:00:00 UTC'
    assert CommonUtil.formatUnixTime(0, 'Asia/Shanghai') == '1970-01-01 08:00:00 CST'
    assert CommonUtil.formatUnixTime(0, 'Not/AZone') == 'Unknown time'


def test_alert_message_content():
    service = RecordingService()
    tokenInfo = TokenInfo(TOKEN, 'CAKE', 'Pancake <Swap>', 18)

    sent = BullishAlignmentNotification.sendAlert(service, '-100', _signal(), tokenInfo, '5m', 'UTC')

    assert sent is True
    chatId, notificationType, message = service.sent[0]
    assert chatId == '-100'
    assert notificationType == NotificationType.BULLISH_ALIGNMENT
    assert message.tokenAddress == TOKEN

    text = message.formattedMessage
    assert '<b>CAKE</b> (Pancake &lt;Swap&gt;)' in text
    assert f'<code>{TOKEN}</code>' in text
    assert '$2.500000' in text
    assert 'EMA21: 2.400000' in text
    assert 'EMA55: 2.200000' in text
    assert 'EMA144: 0.95000000' in text
    assert '2023-11-14 22:15:00 UTC' in text
    assert '2023-11-14 22:20:00 UTC' in text
    assert [button.url for button in message.buttons] == [
        BullishAlignmentUrls.DEXSCREENER_BASE.format(tokenAddress=TOKEN),
        BullishAlignmentUrls.BSCSCAN_TOKEN_BASE.format(tokenAddress=TOKEN),
    ]


def test_alert_without_token_info_uses_short_address():
    service = RecordingService()

    BullishAlignmentNotification.sendAlert(service, '-100', _signal(), None, '5m')

    text = service.sent[0][2].formattedMessage
    assert '<b>0x0E09...cE82</b> (Unknown)' in text


def test_telegram_payload_and_keyboard():
    session = FakeSession(FakeResponse({'ok': True}))
    service = NotificationService('123:abc', timeout=5, session=session)
    buttons = [MessageButton('a', 'https://a'), MessageButton('b', 'https://b'), MessageButton('c', 'https://c')]

    sent = service.sendNotification('-100', NotificationType.BULLISH_ALIGNMENT,
                                    CommonMessage('<b>hi</b>', tokenAddress=TOKEN, buttons=buttons))

    assert sent is True
    url, kwargs = session.posts[0]
    assert url == 'https://api.telegram.org/bot123:abc/sendMessage'
    assert kwargs['timeout'] == 5
    payload = kwargs['json']
    assert payload['chat_id'] == '-100'
    assert payload['text'] == '<b>hi</b>'
    assert payload['parse_mode'] == 'HTML'
    assert payload['reply_markup']['inline_keyboard'] == [
        [{'text': 'a', 'url': 'https://a'}, {'text': 'b', 'url': 'https://b'}],
        [{'text': 'c', 'url': 'https://c'}],
    ]


def test_message_without_buttons_has_no_keyboard():
    session = FakeSession(FakeResponse({'ok': True}))
    service = NotificationService('123:abc', session=session)

    service.sendTGMessage('-100', CommonMessage('plain'))

    assert 'reply_markup' not in session.posts[0][1]['json']


def test_delivery_failures_return_false():
    rejected = NotificationService('t', session=FakeSession(FakeResponse({'ok': False, 'description': 'chat not found'})))
    httpError = NotificationService('t', session=FakeSession(FakeResponse({}, statusCode=500)))
    network = NotificationService('t', session=FakeSession(requests.exceptions.ConnectionError('down')))

    for service in (rejected, httpError, network):
        assert service.sendNotification('-100', NotificationType.BULLISH_ALIGNMENT, CommonMessage('x')) is False


def test_send_alert_never_raises():
    class BrokenService:
        def sendNotification(self, **kwargs):
            raise RuntimeError('boom')

    assert BullishAlignmentNotification.sendAlert(BrokenService(), '-100', _signal(), None, '5m') is False
