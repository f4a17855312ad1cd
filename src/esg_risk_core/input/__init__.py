from esg_risk_core.input.api import ApiSupplierInput
from esg_risk_core.input.base import SupplierInput
from esg_risk_core.input.jsonfile import JsonFileSupplierInput
from esg_risk_core.input.manual import ManualSupplierInput

__all__ = [
    "SupplierInput",
    "ManualSupplierInput",
    "ApiSupplierInput",
    "JsonFileSupplierInput",
]
