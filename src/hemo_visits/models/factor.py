"""Clotting factor inventory data models."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from hemo_visits.utils.naming import resolve_field


@dataclass(frozen=True)
class Factor:
    """Factor concentrate lot held in a center's inventory.

    Attributes:
        id: Backend identifier
        name: Product name
        lot_no: Lot number
        quantity: Units on hand
        expiry_date: Lot expiry date as sent by the backend
        mg: Dosage strength
        drug_type: Drug type (e.g. "Factor VIII")
        supplier_name: Supplier
        company_name: Manufacturer
    """

    id: int
    name: str
    lot_no: str
    quantity: int
    expiry_date: Optional[str] = None
    mg: Optional[float] = None
    drug_type: Optional[str] = None
    supplier_name: Optional[str] = None
    company_name: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Factor":
        """Build a factor from a backend record in any naming convention."""
        return cls(
            id=resolve_field(raw, "Id", 0),
            name=resolve_field(raw, "Name", ""),
            lot_no=resolve_field(raw, "LotNo", ""),
            quantity=int(resolve_field(raw, "Quantity", 0)),
            expiry_date=resolve_field(raw, "ExpiryDate"),
            mg=resolve_field(raw, "Mg"),
            drug_type=resolve_field(raw, "DrugType"),
            supplier_name=resolve_field(raw, "SupplierName"),
            company_name=resolve_field(raw, "CompanyName"),
        )


@dataclass(frozen=True)
class FactorUpdate:
    """Full replacement of a factor's attributes (everything but the id)."""

    name: str
    lot_no: str
    quantity: int
    expiry_date: Optional[str] = None
    mg: Optional[float] = None
    drug_type: Optional[str] = None
    supplier_name: Optional[str] = None
    company_name: Optional[str] = None

    @classmethod
    def with_quantity(cls, factor: Factor, quantity: int) -> "FactorUpdate":
        """Copy every attribute of ``factor`` except the quantity."""
        return cls(
            name=factor.name,
            lot_no=factor.lot_no,
            quantity=quantity,
            expiry_date=factor.expiry_date,
            mg=factor.mg,
            drug_type=factor.drug_type,
            supplier_name=factor.supplier_name,
            company_name=factor.company_name,
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "LotNo": self.lot_no,
            "Quantity": self.quantity,
            "ExpiryDate": self.expiry_date,
            "Mg": self.mg,
            "DrugType": self.drug_type,
            "SupplierName": self.supplier_name,
            "CompanyName": self.company_name,
        }
