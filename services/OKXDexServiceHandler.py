"""
Handles all OKX DEX market API operations: request signing, candle fetching and token metadata
Addresses upstream quirks: reverse chronological order, duplicate rows, unconfirmed live candles
"""
from typing import Dict, List, Optional
from datetime import datetime, timezone
from urllib.parse import urlencode
import base64
import hashlib
import hmac
import json
import time

import requests

from config.Config import Config
from logs.logger import get_logger
from models.Candle import Candle
from models.CandleResponse import CandleResponse
from models.TokenInfo import TokenInfo
from utils.Exceptions import MarketDataError

logger = get_logger(__name__)


class OKXDexAPIConstants:
    """Constants for OKX DEX API configuration"""
    CANDLES_PATH = '/api/v5/dex/market/candles'
    TOKEN_BASIC_INFO_PATH = '/api/v5/dex/market/token/basic-info'
    SUCCESS_CODE = '0'
    MAX_CANDLES_PER_CALL = 299
    RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)
    RATE_LIMIT_CODE = '50011'
    RETRY_DELAY_SECONDS = 1


class OKXDexServiceHandler:
    """Service handler for OKX DEX market data with signed requests"""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.apiKey = config.OKX_API_KEY
        self.secretKey = config.OKX_SECRET_KEY
        self.passphrase = config.OKX_PASSPHRASE
        self.projectId = config.OKX_PROJECT_ID
        self.baseUrl = config.OKX_BASE_URL.rstrip('/')
        self.chainIndex = config.CHAIN_INDEX
        self.timeout = config.REQUEST_TIMEOUT_SECONDS
        self.metadataRetryCount = config.METADATA_RETRY_COUNT
        self.session = session or requests.Session()

    def getCandles(self, tokenAddress: str, granularity: str, limit: int) -> CandleResponse:
        """
        Fetch the most recent closed candles for a token

        Args:
            tokenAddress: Token contract address
            granularity: Candle bar (e.g. '5m')
            limit: Number of candles requested (capped at the API maximum)

        Returns:
            CandleResponse with confirmed candles in ascending unixTime order, or an
            error response on transport errors and malformed payloads
        """
        try:
            params = {
                'chainIndex': self.chainIndex,
                'tokenContractAddress': tokenAddress,
                'bar': granularity,
                'limit': min(limit, OKXDexAPIConstants.MAX_CANDLES_PER_CALL)
            }

            rows = self.hitAPI('GET', OKXDexAPIConstants.CANDLES_PATH, params=params)
            candles = self.processCandles(tokenAddress, granularity, rows)

            logger.debug(f"OKX DEX :: {len(candles)} closed candles for {tokenAddress} ({granularity})")
            return CandleResponse.successResponse(candles)

        except requests.exceptions.Timeout:
            logger.warning(f"OKX DEX :: Timeout fetching candles for {tokenAddress}")
            return CandleResponse.errorResponse('timeout')
        except requests.exceptions.RequestException as e:
            logger.warning(f"OKX DEX :: Network error fetching candles for {tokenAddress}: {e}")
            return CandleResponse.errorResponse(str(e))
        except MarketDataError as e:
            logger.warning(f"OKX DEX :: Bad candle response for {tokenAddress}: {e}")
            return CandleResponse.errorResponse(str(e))

    def getTokenInfo(self, tokenAddress: str) -> Optional[TokenInfo]:
        """Fetch symbol and name for a token, retrying transient failures a bounded number of times"""
        body = [{'chainIndex': self.chainIndex, 'tokenContractAddress': tokenAddress}]

        for attempt in range(self.metadataRetryCount + 1):
            try:
                data = self.hitAPI('POST', OKXDexAPIConstants.TOKEN_BASIC_INFO_PATH, body=body)
                if not data or not isinstance(data[0], dict):
                    logger.info(f"OKX DEX :: No token info for {tokenAddress}")
                    return None
                return TokenInfo.fromRawData(data[0], tokenAddress)

            except (requests.exceptions.RequestException, MarketDataError) as e:
                if attempt < self.metadataRetryCount and self.isRetryable(e):
                    logger.info(f"OKX DEX :: Token info attempt {attempt + 1} failed for {tokenAddress}: {e}")
                    time.sleep(OKXDexAPIConstants.RETRY_DELAY_SECONDS)
                    continue
                logger.warning(f"OKX DEX :: Token info lookup failed for {tokenAddress}: {e}")
                return None
            except (ValueError, TypeError) as e:
                logger.warning(f"OKX DEX :: Malformed token info for {tokenAddress}: {e}")
                return None

        return None

    def hitAPI(self, method: str, path: str, params: Optional[Dict] = None,
               body: Optional[List] = None) -> List:
        """
        Send a signed request and return the `data` array of the envelope

        Raises:
            requests.exceptions.RequestException: transport errors and HTTP error statuses
            MarketDataError: non-zero API code or unexpected payload shape
        """
        requestPath = path
        if params:
            requestPath = f"{path}?{urlencode(params)}"
        bodyText = json.dumps(body, separators=(',', ':')) if body is not None else ''

        headers = self.buildHeaders(method, requestPath, bodyText)
        url = f"{self.baseUrl}{requestPath}"

        if method == 'GET':
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        else:
            response = self.session.post(url, headers=headers, data=bodyText, timeout=self.timeout)
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError:
            raise MarketDataError('Response is not valid JSON')

        if not isinstance(payload, dict):
            raise MarketDataError('Unexpected response envelope')

        code = str(payload.get('code'))
        if code != OKXDexAPIConstants.SUCCESS_CODE:
            raise MarketDataError(f"API error {code}: {payload.get('msg')}", code)

        data = payload.get('data')
        if not isinstance(data, list):
            raise MarketDataError('Response has no data array')
        return data

    def buildHeaders(self, method: str, requestPath: str, body: str = '') -> Dict[str, str]:
        timestamp = self.getTimestamp()
        headers = {
            'Content-Type': 'application/json',
            'OK-ACCESS-KEY': self.apiKey,
            'OK-ACCESS-SIGN': self.sign(timestamp, method, requestPath, body),
            'OK-ACCESS-TIMESTAMP': timestamp,
            'OK-ACCESS-PASSPHRASE': self.passphrase
        }
        if self.projectId:
            headers['OK-ACCESS-PROJECT'] = self.projectId
        return headers

    def sign(self, timestamp: str, method: str, requestPath: str, body: str = '') -> str:
        """base64(HMAC-SHA256(secret, timestamp + METHOD + requestPath + body))"""
        prehash = f"{timestamp}{method.upper()}{requestPath}{body}"
        digest = hmac.new(self.secretKey.encode('utf-8'), prehash.encode('utf-8'), hashlib.sha256).digest()
        return base64.b64encode(digest).decode('utf-8')

    @staticmethod
    def getTimestamp() -> str:
        """ISO 8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z"""
        now = datetime.now(timezone.utc)
        return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"

    def processCandles(self, tokenAddress: str, granularity: str, rows: List) -> List[Candle]:
        """
        Normalize raw rows: drop unconfirmed candles and duplicates, sort ascending

        Raises:
            MarketDataError: if a row cannot be parsed
        """
        candlesByTime: Dict[int, Candle] = {}

        for row in rows:
            try:
                candle = Candle.fromRawData(row, tokenAddress, granularity)
            except (ValueError, TypeError, IndexError, KeyError) as e:
                raise MarketDataError(f"Malformed candle row {row!r}: {e}")

            if not candle.confirmed:
                continue
            candlesByTime[candle.unixTime] = candle

        return [candlesByTime[unixTime] for unixTime in sorted(candlesByTime)]

    @staticmethod
    def isRetryable(error: Exception) -> bool:
        if isinstance(error, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
            return True
        if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
            return error.response.status_code in OKXDexAPIConstants.RETRYABLE_STATUS_CODES
        if isinstance(error, MarketDataError):
            return error.code == OKXDexAPIConstants.RATE_LIMIT_CODE
        return False

