import os
from dataclasses import dataclass
from typing import Any, Optional

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

TRUTHY = {"1", "true", "yes", "y", "on"}


def as_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


@dataclass
class CarrierSettings:
    """Admin-editable carrier configuration (all plain values)."""
    code: str = "yurticishipping"
    active: bool = True
    title: str = "Yurtici Kargo"
    description: str = "Yurtici Kargo standard delivery"
    tariff_file: Optional[str] = None

    def get_config_data(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)


@dataclass
class Settings:
    db_path: str
    upload_dir: str
    catalog_base_url: str
    catalog_timeout: float = 5.0
    catalog_verify_tls: bool = True
    shop_currency: str = "TRY"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        try:
            timeout = float(env.get("CATALOG_TIMEOUT") or 5.0)
        except ValueError:
            timeout = 5.0
        return cls(
            db_path=env.get("SHIPPING_DB_PATH") or os.path.join(APP_DIR, "shipping.db"),
            upload_dir=env.get("UPLOAD_DIR") or os.path.join(APP_DIR, "uploads"),
            catalog_base_url=env.get("CATALOG_BASE_URL") or env.get("APP_URL") or "http://localhost",
            catalog_timeout=timeout,
            catalog_verify_tls=as_bool(env.get("CATALOG_VERIFY_TLS"), default=True),
            shop_currency=(env.get("SHOP_CURRENCY") or "TRY").strip().upper(),
        )
