import datetime
import logging
import sqlite3
from typing import Optional

from .config import CarrierSettings
from .currency import CurrencyProvider

log = logging.getLogger(__name__)


def now_iso():
    return datetime.datetime.now().isoformat(timespec="seconds")


def _colset(cur, table):
    cur.execute(f"PRAGMA table_info({table})")
    return {r[1] for r in cur.fetchall()}


class ConfigStore:
    """Carrier settings and exchange rates kept in SQLite."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        conn = self.connect(); cur = conn.cursor()
        cur.execute("""
            CREATE TABLE IF NOT EXISTS carriers(
                code TEXT PRIMARY KEY,
                active INTEGER DEFAULT 1,
                title TEXT,
                description TEXT,
                tariff_file TEXT,
                updated_at TEXT
            );
        """)
        cur.execute("""
            CREATE TABLE IF NOT EXISTS exchange_rates(
                currency TEXT PRIMARY KEY,
                rate REAL,
                updated_at TEXT
            );
        """)
        cols = _colset(cur, "carriers")
        if "tariff_file" not in cols:
            log.warning("Migrating: adding 'tariff_file' column")
            cur.execute("ALTER TABLE carriers ADD COLUMN tariff_file TEXT")
        if "updated_at" not in cols:
            log.warning("Migrating: adding 'updated_at' column")
            cur.execute("ALTER TABLE carriers ADD COLUMN updated_at TEXT")
        conn.commit()
        # Report
        rows = cur.execute("SELECT code, active, title, tariff_file FROM carriers ORDER BY code").fetchall()
        if not rows:
            log.info("DB READY: no carrier settings saved yet, defaults apply")
        for r in rows:
            log.debug("Carrier %-16s active=%s title=%s tariff=%s",
                      r["code"], bool(r["active"]), r["title"], r["tariff_file"] or "-")
        rates = cur.execute("SELECT currency, rate FROM exchange_rates ORDER BY currency").fetchall()
        log.info("DB READY: %d exchange rates: %s", len(rates),
                 ", ".join(f"{r['currency']}={r['rate']}" for r in rates) or "-")
        conn.close()

    # ---------- Carrier settings ----------
    def get_carrier_settings(self, code: str) -> CarrierSettings:
        conn = self.connect(); cur = conn.cursor()
        row = cur.execute("SELECT * FROM carriers WHERE code=?", (code,)).fetchone()
        conn.close()
        if not row:
            return CarrierSettings(code=code)
        defaults = CarrierSettings(code=code)
        return CarrierSettings(
            code=row["code"],
            active=bool(row["active"]),
            title=row["title"] or defaults.title,
            description=row["description"] or defaults.description,
            tariff_file=row["tariff_file"],
        )

    def save_carrier_settings(self, s: CarrierSettings):
        conn = self.connect(); cur = conn.cursor()
        cur.execute("""
            INSERT OR REPLACE INTO carriers (code, active, title, description, tariff_file, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (s.code, 1 if s.active else 0, s.title, s.description, s.tariff_file, now_iso()))
        conn.commit(); conn.close()
        log.info("Carrier saved: %s active=%s title=%s", s.code, s.active, s.title)

    def set_tariff_file(self, code: str, path: Optional[str]):
        s = self.get_carrier_settings(code)
        s.tariff_file = path
        self.save_carrier_settings(s)

    # ---------- Exchange rates ----------
    def set_exchange_rate(self, currency: str, rate: float):
        conn = self.connect(); cur = conn.cursor()
        cur.execute("INSERT OR REPLACE INTO exchange_rates (currency, rate, updated_at) VALUES (?, ?, ?)",
                    (currency.upper(), float(rate), now_iso()))
        conn.commit(); conn.close()
        log.info("Exchange rate set: %s=%s", currency.upper(), rate)

    def get_exchange_rate(self, currency: str) -> Optional[float]:
        conn = self.connect(); cur = conn.cursor()
        row = cur.execute("SELECT rate FROM exchange_rates WHERE currency=?",
                          ((currency or "").upper(),)).fetchone()
        conn.close()
        return row["rate"] if row else None


class SqliteCurrencyProvider(CurrencyProvider):
    def __init__(self, store: ConfigStore, currency: str):
        self.store = store
        self.currency = currency

    def current_currency(self) -> str:
        return self.currency

    def exchange_rate(self, currency: str) -> Optional[float]:
        return self.store.get_exchange_rate(currency)
