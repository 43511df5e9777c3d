"""
Side-by-side comparison of bank home loan packages.

The catalog is reference data loaded once (config/banks.yaml) and passed in as
a mapping of product id -> BankProduct, so tests and callers can swap it.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from tools.calc_mortgage import AmortizationResult, ZERO_RATE_STRAIGHT_LINE, compute_amortization
from tools.policy import load_bank_rows, load_policy

logger = logging.getLogger(__name__)

MAX_COMPARE = 3


@dataclass(frozen=True)
class BankProduct:
    id: str
    bank_name: str
    package_name: str
    interest_rate: float  # % p.a.
    lock_in_years: int
    min_income: float
    max_ltv: float  # % of property value
    features: Tuple[str, ...] = ()
    color: str = "#64748b"


Catalog = Mapping[str, BankProduct]

_REQUIRED = ("id", "bank_name", "package_name", "interest_rate", "lock_in_years", "min_income", "max_ltv")

DEFAULT_BANK_ROWS: List[Dict[str, Any]] = [
    {"id": "maybank", "bank_name": "Maybank", "package_name": "Home Loan-i", "interest_rate": 4.25,
     "lock_in_years": 3, "min_income": 3000, "max_ltv": 90,
     "features": ["BRR + 1.75%", "Flexible payment", "Online application"], "color": "#eab308"},
    {"id": "cimb", "bank_name": "CIMB", "package_name": "Conventional Home Loan", "interest_rate": 4.35,
     "lock_in_years": 5, "min_income": 3000, "max_ltv": 90,
     "features": ["BLR - 2.00%", "No early settlement penalty after lock-in", "Free valuation"], "color": "#ef4444"},
    {"id": "public-bank", "bank_name": "Public Bank", "package_name": "PB Home Loan", "interest_rate": 4.15,
     "lock_in_years": 3, "min_income": 2500, "max_ltv": 95,
     "features": ["BLR - 2.10%", "Lower minimum income", "Higher LTV ratio"], "color": "#3b82f6"},
    {"id": "rhb", "bank_name": "RHB Bank", "package_name": "Smart Home Loan", "interest_rate": 4.40,
     "lock_in_years": 2, "min_income": 3500, "max_ltv": 90,
     "features": ["BRR + 1.85%", "Shortest lock-in period", "Cashback promotion"], "color": "#22c55e"},
]


def product_from_row(row: Dict[str, Any]) -> BankProduct:
    missing = [k for k in _REQUIRED if k not in row]
    if missing:
        raise ValueError(f"Bank entry {row.get('id', '?')!r} is missing {', '.join(missing)}")
    return BankProduct(
        id=str(row["id"]),
        bank_name=row["bank_name"],
        package_name=row["package_name"],
        interest_rate=float(row["interest_rate"]),
        lock_in_years=int(row["lock_in_years"]),
        min_income=float(row["min_income"]),
        max_ltv=float(row["max_ltv"]),
        features=tuple(row.get("features") or ()),
        color=row.get("color", "#64748b"),
    )


def build_catalog(rows: Iterable[Dict[str, Any]]) -> Dict[str, BankProduct]:
    catalog: Dict[str, BankProduct] = {}
    for row in rows:
        product = product_from_row(row)
        if product.id in catalog:
            raise ValueError(f"Duplicate bank id {product.id!r}")
        catalog[product.id] = product
    return catalog


def load_catalog(path=None) -> Dict[str, BankProduct]:
    rows = load_bank_rows(path)
    if rows is None:
        rows = DEFAULT_BANK_ROWS
    catalog = build_catalog(rows)
    logger.info("Loaded %d bank packages", len(catalog))
    return catalog


@dataclass(frozen=True)
class ComparisonSelection:
    """Ordered, capped set of product ids picked for comparison."""
    ids: Tuple[str, ...] = ()
    limit: int = MAX_COMPARE

    def __post_init__(self):
        # distinct ids, first-come, never more than the limit
        ids = tuple(dict.fromkeys(self.ids))
        if len(ids) > self.limit:
            logger.debug("Selection trimmed to %d of %d ids", self.limit, len(ids))
            ids = ids[:self.limit]
        object.__setattr__(self, "ids", ids)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self):
        return iter(self.ids)

    @property
    def is_full(self) -> bool:
        return len(self.ids) >= self.limit

    def can_add(self, product_id: str) -> bool:
        return product_id in self.ids or not self.is_full

    def add(self, product_id: str) -> "ComparisonSelection":
        if product_id in self.ids:
            return self
        if self.is_full:
            logger.debug("Selection full (%d), ignoring %s", self.limit, product_id)
            return self
        return ComparisonSelection(self.ids + (product_id,), self.limit)

    def remove(self, product_id: str) -> "ComparisonSelection":
        return ComparisonSelection(tuple(i for i in self.ids if i != product_id), self.limit)

    def toggle(self, product_id: str) -> "ComparisonSelection":
        return self.remove(product_id) if product_id in self.ids else self.add(product_id)


def default_selection(policy: Optional[dict] = None) -> ComparisonSelection:
    policy = policy if policy is not None else load_policy()
    limit = int(policy["max_compare"])
    selection = ComparisonSelection(limit=limit)
    for product_id in policy["default_selection"]:
        selection = selection.add(product_id)
    return selection


def _selected_products(selected_ids: Iterable[str], catalog: Catalog) -> List[BankProduct]:
    return [catalog[i] for i in selected_ids if i in catalog]


def compare_products(principal: float, term_years: float, selected_ids: Iterable[str],
                     catalog: Optional[Catalog] = None) -> Dict[str, AmortizationResult]:
    """Repayment figures per selected product; empty when loan amount or tenure is missing."""
    catalog = catalog if catalog is not None else load_catalog()
    if principal <= 0 or term_years <= 0:
        return {}
    out: Dict[str, AmortizationResult] = {}
    for product in _selected_products(selected_ids, catalog):
        result = compute_amortization(principal, product.interest_rate, term_years,
                                      zero_rate=ZERO_RATE_STRAIGHT_LINE)
        if result is not None:
            out[product.id] = result
    return out


def best_rate_ids(selected_ids: Iterable[str], catalog: Optional[Catalog] = None) -> List[str]:
    """Every selected product sharing the lowest rate (ties are all flagged)."""
    catalog = catalog if catalog is not None else load_catalog()
    products = _selected_products(selected_ids, catalog)
    if not products:
        return []
    best = min(p.interest_rate for p in products)
    return [p.id for p in products if p.interest_rate == best]


@dataclass(frozen=True)
class ComparisonSummary:
    lowest_rate: float
    highest_rate: float
    count: int


def comparison_summary(selected_ids: Iterable[str], catalog: Optional[Catalog] = None) -> Optional[ComparisonSummary]:
    catalog = catalog if catalog is not None else load_catalog()
    rates = [p.interest_rate for p in _selected_products(selected_ids, catalog)]
    if not rates:
        return None
    return ComparisonSummary(lowest_rate=min(rates), highest_rate=max(rates), count=len(rates))
