"""
Display formatters for receipt values.

All functions are pure and never raise on bad input: unknown codes pass
through, unparseable amounts render as the placeholder, missing explorer
data yields None.
"""

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from dateutil import parser as dateutil_parser

from receipt_engine.config import settings
from receipt_engine.models.enums import StatusTone
from receipt_engine.schemas.receipt import SwapInfo

ELLIPSIS = "…"


# ─── Network tables ───────────────────────────────────────────

NETWORK_DISPLAY_NAMES = {
    "ETHEREUM": "Ethereum (ERC-20)",
    "TRON": "Tron (TRC-20)",
    "BSC": "BNB Smart Chain (BEP-20)",
    "POLYGON": "Polygon",
    "AVALANCHE_C": "Avalanche C-Chain",
    "AVALANCHE_X": "Avalanche X-Chain",
    "AVALANCHE_P": "Avalanche P-Chain",
    "BITCOIN": "Bitcoin",
    "SOLANA": "Solana",
}

_ETHERSCAN = "https://etherscan.io/tx/"
_TRONSCAN = "https://tronscan.org/#/transaction/"
_BSCSCAN = "https://bscscan.com/tx/"
_POLYGONSCAN = "https://polygonscan.com/tx/"
_SNOWTRACE = "https://snowtrace.io/tx/"
_BLOCKSTREAM = "https://blockstream.info/tx/"
_SOLSCAN = "https://solscan.io/tx/"

EXPLORER_URLS = {
    "ETHEREUM": _ETHERSCAN,
    "ETH": _ETHERSCAN,
    "ERC-20": _ETHERSCAN,
    "ERC20": _ETHERSCAN,
    "TRON": _TRONSCAN,
    "TRX": _TRONSCAN,
    "TRC-20": _TRONSCAN,
    "TRC20": _TRONSCAN,
    "BSC": _BSCSCAN,
    "BNB": _BSCSCAN,
    "BEP-20": _BSCSCAN,
    "BEP20": _BSCSCAN,
    "BINANCE": _BSCSCAN,
    "BINANCE SMART CHAIN": _BSCSCAN,
    "POLYGON": _POLYGONSCAN,
    "MATIC": _POLYGONSCAN,
    "AVALANCHE": _SNOWTRACE,
    "AVALANCHE_C": _SNOWTRACE,
    "AVAX": _SNOWTRACE,
    "AVALANCHE_X": "https://avascan.info/blockchain/x/tx/",
    "AVALANCHE_P": "https://avascan.info/blockchain/p/tx/",
    "BITCOIN": _BLOCKSTREAM,
    "BTC": _BLOCKSTREAM,
    "SOLANA": _SOLSCAN,
    "SOL": _SOLSCAN,
}

# "Swap 20000 NGNZ to 12.11754014 USDT", "Crypto Swap: 1 BTC for 45,000 USDT"
SWAP_NARRATION_PATTERN = re.compile(
    r"(Swap|Swapped|Crypto Swap:)\s+([\d.,]+)\s+([A-Za-z]+)\s+(?:to|for)\s+([\d.,]+)\s+([A-Za-z]+)",
    re.IGNORECASE,
)

SUCCESS_STATUSES = ("successful", "success")
FAILED_STATUSES = ("failed", "error")


# ─── Presence / text ──────────────────────────────────────────

def is_present(value: Any) -> bool:
    """Present means not None and not an empty string. 0 and False count."""
    return value is not None and value != ""


def as_text(value: Any) -> str:
    """Render a scalar for display; missing or blank becomes the placeholder."""
    if value is None:
        return settings.PLACEHOLDER
    if isinstance(value, str):
        return value if value.strip() else settings.PLACEHOLDER
    return str(value)


def mask_middle(value: Any, lead: Optional[int] = None, tail: Optional[int] = None) -> str:
    """
    Shorten a long identifier to lead…tail form.
    Values no longer than lead + tail are returned unchanged.
    """
    lead = settings.MASK_LEAD if lead is None else lead
    tail = settings.MASK_TAIL if tail is None else tail
    s = str(value)
    if len(s) <= lead + tail:
        return s
    return f"{s[:lead]}{ELLIPSIS}{s[len(s) - tail:]}"


# ─── Amounts ──────────────────────────────────────────────────

def parse_number(value: Any) -> Optional[Decimal]:
    """Parse an amount to Decimal. Returns None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        n = value
    elif isinstance(value, (int, float)):
        n = Decimal(str(value))
    else:
        s = str(value).strip().replace(",", "")
        if not s:
            return None
        try:
            n = Decimal(s)
        except (InvalidOperation, ValueError):
            return None
    if not n.is_finite():
        return None
    return n


def is_fiat(currency_or_symbol: Optional[str]) -> bool:
    if not currency_or_symbol:
        return False
    return currency_or_symbol.strip().upper() in settings.fiat_codes


def _fiat_glyph(code: str) -> str:
    for known, glyph in settings.FIAT_CURRENCY_GLYPHS.items():
        if known.upper() == code:
            return glyph
    return code


def format_amount_with_symbol(amount: Any, currency_or_symbol: Optional[str] = None) -> str:
    """
    Render an amount with its currency.

    Fiat family: whole units, thousands-grouped, glyph prefix (₦10,000).
    Anything else: up to MAX_FRACTION_DIGITS decimals, grouped, symbol suffix
    (0.00000001 BTC).
    """
    n = parse_number(amount)
    if n is None:
        return settings.PLACEHOLDER

    symbol = (currency_or_symbol or "").strip().upper()

    with localcontext() as ctx:
        ctx.prec = 60
        if symbol and symbol in settings.fiat_codes:
            whole = n.quantize(Decimal(1), rounding=ROUND_HALF_UP)
            return f"{_fiat_glyph(symbol)}{whole:,.0f}"

        step = Decimal(1).scaleb(-settings.MAX_FRACTION_DIGITS)
        rounded = n.quantize(step, rounding=ROUND_HALF_UP)
        text = f"{rounded:,f}"

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"{text} {symbol}".strip()


# ─── Networks ─────────────────────────────────────────────────

def pretty_network_name(code: Optional[str]) -> Optional[str]:
    """Human name for a network code; unknown codes are returned unchanged."""
    if not is_present(code):
        return code
    return NETWORK_DISPLAY_NAMES.get(str(code).strip().upper(), code)


def resolve_explorer_url(network: Any, tx_hash: Any) -> Optional[str]:
    """
    Explorer URL for a transaction hash on a known network.
    Never guesses: unmapped networks and missing inputs give None.
    """
    if not network or not tx_hash:
        return None
    base_url = EXPLORER_URLS.get(str(network).strip().upper())
    if base_url is None:
        return None
    return f"{base_url}{tx_hash}"


# ─── Narration ────────────────────────────────────────────────

def parse_swap_narration(text: Optional[str]) -> Optional[SwapInfo]:
    """
    Best-effort extraction of both swap legs from free-text narration.
    Returns None on any miss.
    """
    if not text:
        return None
    m = SWAP_NARRATION_PATTERN.search(str(text))
    if not m:
        return None

    from_amount = parse_number(m.group(2))
    to_amount = parse_number(m.group(4))
    if from_amount is None or to_amount is None:
        return None

    return SwapInfo(
        from_amount=from_amount,
        from_currency=m.group(3).upper(),
        to_amount=to_amount,
        to_currency=m.group(5).upper(),
    )


# ─── Status / dates ───────────────────────────────────────────

def status_tone(status: Optional[str]) -> StatusTone:
    s = (status or "").strip().lower()
    if s in SUCCESS_STATUSES:
        return StatusTone.SUCCESS
    if s in FAILED_STATUSES:
        return StatusTone.FAILED
    return StatusTone.PENDING


def format_display_date(value: Any) -> Optional[str]:
    """
    Turn an ISO timestamp into a display date ("Jan 01, 2024, 10:30 AM").
    Anything dateutil cannot parse is returned as-is.
    """
    if not is_present(value):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = dateutil_parser.isoparse(str(value))
        except (ValueError, OverflowError):
            return str(value)
    return parsed.strftime("%b %d, %Y, %I:%M %p")
