# src/tufinanza/application/quote_service.py
"""
Quote Service - Simulated Market Quotes with a TTL Cache

This module produces the USDT (ARS per USDT) quote and the USD exchange rate
snapshot the app displays. There is no real market feed: values are
simulated around static bases and cached in the key-value store for a fixed
time-to-live (one hour by default).

A cached value is Fresh while now - timestamp < TTL and Stale afterwards.
Reads that find nothing, a Stale value or an undecodable value generate a new
one and write it back. Cache writes are fire-and-forget: failures are logged
and the freshly generated value is still returned.

Files that USE this module:
- tufinanza.app (prints the current quote and rates)
- tests.test_quote_service (unit tests)

Files that this module USES:
- tufinanza.adapters.persistence.kv_store (KeyValueStore interface)
- tufinanza.config (cache TTL and simulation parameters)
- tufinanza.domain.currencies (static rate table)
- tufinanza.domain.models (USDTQuote, ExchangeRates)
"""
from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Protocol

from tufinanza.adapters.persistence.kv_store import KeyValueStore, StorageKeys
from tufinanza.config import Settings, settings as default_settings
from tufinanza.domain.currencies import Currency, USD_EXCHANGE_RATES
from tufinanza.domain.errors import InvalidRecordError
from tufinanza.domain.models import ExchangeRates, QuoteSource, RatesSource, USDTQuote

logger = logging.getLogger(__name__)

USDT_QUOTE_KEY = StorageKeys.USDT_QUOTE
EXCHANGE_RATES_KEY = StorageKeys.EXCHANGE_RATES


class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1), e.g. random.Random."""
    def random(self) -> float:
        ...


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class QuoteService:
    """
    Generates simulated quotes/rates and caches them in a key-value store.

    The store, random source and clock are injected so callers (and tests)
    can substitute an in-memory store, a seeded random.Random and a fixed
    clock.
    """

    def __init__(
        self,
        store: KeyValueStore,
        rng: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the quote service.

        Args:
            store: Key-value store used as cache
            rng: Random source for simulated fluctuation (default: new random.Random)
            clock: Callable returning the current aware datetime (default: UTC now)
            settings: Settings override (default: global settings)
        """
        self.store = store
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.settings = settings or default_settings
        self.ttl = self.settings.quote_cache_duration

    # -------- generation --------

    def generate_usdt_quote(self) -> USDTQuote:
        """
        Generate a simulated USDT quote around the configured base price.

        With the defaults the price is 1200 +/- 20, rounded to 2 decimals, so
        it always lies in [1180, 1220].
        """
        spread = self.settings.usdt_fluctuation * 2
        fluctuation = (self.rng.random() - 0.5) * spread
        price = round(self.settings.usdt_base_price + fluctuation, 2)
        return USDTQuote(price=price, timestamp=self.clock(), source=QuoteSource.SIMULATION)

    def generate_exchange_rates(self) -> ExchangeRates:
        """
        Generate a simulated rate snapshot from the static table.

        Each non-USD rate gets an independent multiplicative jitter of up to
        +/- rate_fluctuation_pct percent. Cross rates are therefore not kept
        mutually consistent.
        """
        spread = self.settings.rate_fluctuation_pct / 100 * 2
        rates: Dict[Currency, float] = {}
        for currency, base_rate in USD_EXCHANGE_RATES.items():
            if currency == Currency.USD:
                rates[currency] = base_rate
                continue
            fluctuation = (self.rng.random() - 0.5) * spread
            rates[currency] = base_rate * (1 + fluctuation)
        return ExchangeRates(rates=rates, timestamp=self.clock(), source=RatesSource.SIMULATION)

    # -------- staleness --------

    def should_update_quotes(self, last_update: Optional[datetime]) -> bool:
        """
        Check if a cached value must be regenerated.

        Args:
            last_update: Timestamp of the cached value, or None if there is none

        Returns:
            True if there is no timestamp or its age is at least the TTL
        """
        if last_update is None:
            return True
        if last_update.tzinfo is None:
            last_update = last_update.replace(tzinfo=timezone.utc)
        return self.clock() - last_update >= self.ttl

    # -------- cache reads --------

    def _read_json(self, key: str) -> Optional[dict]:
        try:
            raw = self.store.get_item(key)
        except Exception as e:
            logger.error("Error reading %s from cache: %s", key, e)
            return None
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Cached value for %s is not valid JSON: %s", key, e)
            return None
        if not isinstance(data, dict):
            logger.error("Cached value for %s has unexpected shape", key)
            return None
        return data

    def get_cached_usdt_quote(self) -> Optional[USDTQuote]:
        """
        Get the cached USDT quote if it is still fresh.

        Returns:
            USDTQuote, or None when missing, stale or unreadable
        """
        data = self._read_json(USDT_QUOTE_KEY)
        if data is None:
            return None
        try:
            quote = USDTQuote.from_json(data)
        except InvalidRecordError as e:
            logger.error("Error reading cached USDT quote: %s", e)
            return None
        if self.should_update_quotes(quote.timestamp):
            logger.debug("Cached USDT quote from %s is stale", quote.timestamp)
            return None
        return quote

    def get_cached_exchange_rates(self) -> Optional[ExchangeRates]:
        """
        Get the cached exchange rate snapshot if it is still fresh.

        Returns:
            ExchangeRates, or None when missing, stale or unreadable
        """
        data = self._read_json(EXCHANGE_RATES_KEY)
        if data is None:
            return None
        try:
            rates = ExchangeRates.from_json(data)
        except InvalidRecordError as e:
            logger.error("Error reading cached exchange rates: %s", e)
            return None
        if self.should_update_quotes(rates.timestamp):
            logger.debug("Cached exchange rates from %s are stale", rates.timestamp)
            return None
        return rates

    # -------- cache writes --------

    def _write_json(self, key: str, payload: dict) -> bool:
        try:
            self.store.set_item(key, json.dumps(payload, ensure_ascii=False))
            return True
        except Exception as e:
            logger.error("Error saving %s to cache: %s", key, e)
            return False

    def save_usdt_quote_to_cache(self, quote: USDTQuote) -> bool:
        """Persist a USDT quote. Failures are logged, never raised."""
        return self._write_json(USDT_QUOTE_KEY, quote.to_json())

    def save_exchange_rates_to_cache(self, rates: ExchangeRates) -> bool:
        """Persist an exchange rate snapshot. Failures are logged, never raised."""
        return self._write_json(EXCHANGE_RATES_KEY, rates.to_json())

    # -------- current values --------

    def get_current_usdt_quote(self) -> USDTQuote:
        """
        Get the current USDT quote, from cache or freshly generated.

        Returns:
            Fresh cached quote, or a new one (also written to the cache)
        """
        cached = self.get_cached_usdt_quote()
        if cached:
            return cached

        quote = self.generate_usdt_quote()
        logger.info("Generated new USDT quote: %.2f", quote.price)
        self.save_usdt_quote_to_cache(quote)
        return quote

    def get_current_exchange_rates(self) -> ExchangeRates:
        """
        Get the current exchange rates, from cache or freshly generated.

        Returns:
            Fresh cached snapshot, or a new one (also written to the cache)
        """
        cached = self.get_cached_exchange_rates()
        if cached:
            return cached

        rates = self.generate_exchange_rates()
        logger.info("Generated new exchange rate snapshot (%d currencies)", len(rates.rates))
        self.save_exchange_rates_to_cache(rates)
        return rates
