"""
Tracked Tokens - Static instrument universe monitored on BSC

Order matters: tokens are processed in this order on every cycle.
Override at deploy time with the TRACKED_TOKENS environment variable.
"""

from typing import List

DEFAULT_TRACKED_TOKENS: List[str] = [
    '0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c',  # WBNB
    '0x0E09FaBB73Bd3Ade0a17ECC321fD13a19e81cE82',  # CAKE
    '0x7130d2A12B9BCbFAe4f2634d864A1Ee1Ce3Ead9c',  # BTCB
    '0x2170Ed0880ac9A755fd29B2688956BD959F933F8',  # ETH
    '0x1D2F0da169ceB9fC7B3144628dB156f3F6c60dBE',  # XRP
    '0xbA2aE424d960c26247Dd6c32edC70B295c744C43',  # DOGE
    '0x3EE2200Efb3400fAbB9AacF31297cBdD1d435D47',  # ADA
    '0xF8A0BF9cF54Bb92F17374d9e9A321E6a111a51bD',  # LINK
]


def parseTrackedTokens(rawValue: str) -> List[str]:
    """Parse a comma separated address list, keeping order and dropping duplicates"""
    tokens = []
    seen = set()
    for address in (rawValue or '').split(','):
        address = address.strip()
        if not address or address.lower() in seen:
            continue
        seen.add(address.lower())
        tokens.append(address)
    return tokens
