# shipping_rates/tariff.py
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

log = logging.getLogger(__name__)

REFERENCE_CURRENCY = "TRY"

# ----------------------------------------------------------------------
# Yurtici weight brackets: (max_kg inclusive, cost in TRY)
# ----------------------------------------------------------------------
YURTICI_BRACKETS = (
    (5, 135.51),
    (10, 155.71),
    (15, 185.95),
    (20, 255.78),
    (25, 326.52),
    (30, 397.57),
)
YURTICI_ZERO_COST = 101.5
YURTICI_PER_KG = 13.297


class TariffSheetError(ValueError):
    pass


@dataclass(frozen=True)
class TariffTable:
    brackets: Tuple[Tuple[float, float], ...]
    zero_cost: float
    per_kg: float
    currency: str = REFERENCE_CURRENCY

    def cost(self, weight: float) -> float:
        """
        Cost for a chargeable weight in kg.
        Exactly 0 has its own price; otherwise the first bracket with weight <= max_kg
        wins, and past the last bracket the price is weight * per_kg.
        """
        weight = float(weight)
        if weight == 0:
            return self.zero_cost
        for max_kg, cost in self.brackets:
            if weight <= max_kg:
                return cost
        return weight * self.per_kg


YURTICI_TARIFF = TariffTable(YURTICI_BRACKETS, YURTICI_ZERO_COST, YURTICI_PER_KG)


def base_cost(weight: float, table: Optional[TariffTable] = None) -> float:
    return (table or YURTICI_TARIFF).cost(weight)


# ---------- Tariff sheets (CSV / Excel) ----------
SHEET_ALIASES = {
    "upto": "max_kg", "upto_kg": "max_kg", "max_weight": "max_kg", "weight": "max_kg", "kg": "max_kg",
    "price": "cost", "rate": "cost", "charge": "cost", "amount": "cost",
    "rate_per_kg": "per_kg", "perkg": "per_kg",
}


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize tariff sheet header variations to max_kg / cost / per_kg."""
    df = df.rename(columns={c: str(c).strip().lower().replace(" ", "_") for c in df.columns})
    for old, new in SHEET_ALIASES.items():
        if old in df.columns and new not in df.columns:
            df = df.rename(columns={old: new})
    return df


def read_sheet(path: str) -> pd.DataFrame:
    if not path or not os.path.exists(path):
        raise TariffSheetError(f"Tariff sheet not found: {path}")
    lower = path.lower()
    if lower.endswith((".xlsx", ".xls")):
        return pd.read_excel(path)
    if lower.endswith(".csv"):
        return pd.read_csv(path)
    raise TariffSheetError(f"Unsupported tariff sheet type: {os.path.basename(path)}")


def load_tariff_sheet(path: str, defaults: TariffTable = YURTICI_TARIFF) -> TariffTable:
    """
    Build a TariffTable from a sheet with `max_kg` and `cost` columns.
    A row with max_kg == 0 sets the zero-weight price; an optional `per_kg` column
    sets the extrapolation rate. Anything not in the sheet comes from `defaults`.
    """
    try:
        df = read_sheet(path)
    except TariffSheetError:
        raise
    except Exception as e:
        raise TariffSheetError(f"Could not read tariff sheet {os.path.basename(path)}: {e}") from e

    df = normalize_columns(df)
    missing = [c for c in ("max_kg", "cost") if c not in df.columns]
    if missing:
        raise TariffSheetError(f"Tariff sheet is missing columns: {', '.join(missing)}")

    df["max_kg"] = pd.to_numeric(df["max_kg"], errors="coerce")
    df["cost"] = pd.to_numeric(df["cost"], errors="coerce")
    rows = df.dropna(subset=["max_kg", "cost"])
    rows = rows[(rows["max_kg"] >= 0) & (rows["cost"] >= 0)].sort_values("max_kg")

    zero = rows[rows["max_kg"] == 0]
    brackets = rows[rows["max_kg"] > 0]
    if brackets.empty:
        raise TariffSheetError(f"Tariff sheet {os.path.basename(path)} has no usable weight brackets")

    per_kg = defaults.per_kg
    if "per_kg" in df.columns:
        rates = pd.to_numeric(df["per_kg"], errors="coerce").dropna()
        rates = rates[rates > 0]
        if not rates.empty:
            per_kg = float(rates.iloc[0])

    table = TariffTable(
        brackets=tuple((float(r.max_kg), float(r.cost)) for r in brackets.itertuples(index=False)),
        zero_cost=float(zero["cost"].iloc[0]) if not zero.empty else defaults.zero_cost,
        per_kg=per_kg,
        currency=defaults.currency,
    )
    log.info("Loaded tariff sheet %s: %d brackets up to %.2fkg, zero=%.2f per_kg=%.3f",
             os.path.basename(path), len(table.brackets), table.brackets[-1][0],
             table.zero_cost, table.per_kg)
    return table
