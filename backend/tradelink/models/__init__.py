from .user import User
from .farmer import Farmer
from .buyer import Buyer
from .listing import Listing
from .match import Match
from .negotiation import Negotiation, Offer
from .transaction import Transaction, Payment
from .export_company import ExportCompany
from .document import Document
from .supplier_network import SupplierNetwork
from .audit_log import AuditLog
from ..core.database import Base
__all__ = [
    "User",
    "Farmer",
    "Buyer",
    "Listing",
    "Match",
    "Negotiation",
    "Offer",
    "Transaction",
    "Payment",
    "ExportCompany",
    "Document",
    "SupplierNetwork",
    "AuditLog",
    "Base"
]
