"""
Data loaders for company directory, line item sheets and invoice files
"""

import json
import pandas as pd
from pathlib import Path
from typing import List, Dict, Optional, Union
import yaml

from models.invoice import Company, LineItem
from utils.validators import parse_number_or_zero


class CompanyDirectory:
    """Buyer companies selectable on the invoice form"""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = "data/companies.yaml",
        mapping: Optional[Dict[str, Dict[str, str]]] = None
    ):
        if mapping is not None:
            self.path = None
            self.companies = self._build(mapping)
        else:
            self.path = Path(path)
            self.companies = self._load_companies()

    @staticmethod
    def _build(entries: Dict[str, Dict[str, str]]) -> Dict[str, Company]:
        return {
            key: Company(key=key, name=entry["name"], address=entry["address"].strip())
            for key, entry in entries.items()
        }

    def _load_companies(self) -> Dict[str, Company]:
        """Load key -> {name, address} mapping"""
        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return self._build(data.get('companies', data))

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Dict[str, str]]) -> "CompanyDirectory":
        return cls(path=None, mapping=mapping)

    def __contains__(self, key: str) -> bool:
        return key in self.companies

    def __len__(self) -> int:
        return len(self.companies)

    def keys(self) -> List[str]:
        return list(self.companies)

    def get(self, key: str) -> Company:
        """Get company by key"""
        company = self.companies.get(key)
        if not company:
            raise ValueError(f"Company {key} not found")
        return company


class LineItemLoader:
    """Load line items from a CSV sheet"""

    COLUMNS = ['description', 'hsn', 'quantity', 'rate', 'per']

    @staticmethod
    def from_dataframe(df: pd.DataFrame) -> List[LineItem]:
        """Rows in sheet order; unparseable numbers become 0"""
        missing = [c for c in LineItemLoader.COLUMNS[:4] if c not in df.columns]
        if missing:
            raise ValueError(f"Line item sheet missing columns: {', '.join(missing)}")

        df = df.fillna('')
        items = []
        for _, row in df.iterrows():
            items.append(LineItem(
                description=str(row['description']).strip(),
                hsn_code=str(row['hsn']).strip(),
                quantity=parse_number_or_zero(row['quantity']),
                rate=parse_number_or_zero(row['rate']),
                unit=str(row.get('per', '') or 'Nos').strip()
            ))
        return items

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> List[LineItem]:
        # Read as text so HSN codes keep their leading zeros
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        return cls.from_dataframe(df)


def load_invoice_request(path: Union[str, Path]) -> Dict:
    """Read an invoice request body from a JSON file"""
    with open(path, encoding="utf-8") as f:
        return json.load(f)
