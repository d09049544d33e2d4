"""
Telegram delivery for formatted alerts
"""
from typing import Dict, List, Optional
import requests
from notification.MessageFormat import CommonMessage, MessageButton
from notification.NotificationType import NotificationType
from logs.logger import get_logger

logger = get_logger(__name__)

TELEGRAM_SEND_MESSAGE_URL = "https://api.telegram.org/bot{token}/sendMessage"
BUTTONS_PER_ROW = 2


class NotificationService:
    """
    Posts a CommonMessage to one Telegram chat.

    Delivery problems (network errors, HTTP errors, `ok: false` replies) are
    logged and reported as False; nothing is raised to the caller.
    """

    def __init__(self, botToken: str, timeout: float = 30, session: Optional[requests.Session] = None):
        self.botToken = botToken
        self.timeout = timeout
        self.session = session or requests.Session()

    def sendNotification(self, chatId: str, notificationType: NotificationType,
                         commonMessage: CommonMessage) -> bool:
        delivered = self.sendTGMessage(chatId, commonMessage)

        outcome = "Sent" if delivered else "Could not send"
        log = logger.info if delivered else logger.error
        log(f"TELEGRAM :: {outcome} {notificationType.value} alert for {commonMessage.tokenAddress}")

        return delivered

    def sendTGMessage(self, chatId: str, commonMessage: CommonMessage) -> bool:
        payload = {
            'chat_id': chatId,
            'text': commonMessage.formattedMessage,
            'parse_mode': 'HTML',
            'disable_web_page_preview': True
        }
        if commonMessage.buttons:
            payload['reply_markup'] = {'inline_keyboard': self.buildInlineKeyboard(commonMessage.buttons)}

        try:
            response = self.session.post(
                TELEGRAM_SEND_MESSAGE_URL.format(token=self.botToken),
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
            reply = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"TELEGRAM :: sendMessage failed: {e}")
            return False

        if not reply.get('ok'):
            logger.error(f"TELEGRAM :: API rejected message: {reply.get('description')}")
            return False
        return True

    @staticmethod
    def buildInlineKeyboard(buttons: List[MessageButton]) -> List[List[Dict[str, str]]]:
        """URL buttons laid out BUTTONS_PER_ROW to a row"""
        keys = [{'text': button.text, 'url': button.url} for button in buttons]
        return [keys[i:i + BUTTONS_PER_ROW] for i in range(0, len(keys), BUTTONS_PER_ROW)]
