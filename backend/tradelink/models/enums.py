# backend/tradelink/models/enums.py

import enum


class UserRole(str, enum.Enum):
    FARMER = "FARMER"
    BUYER = "BUYER"
    EXPORT_COMPANY = "EXPORT_COMPANY"
    ADMIN = "ADMIN"


class QualityGrade(str, enum.Enum):
    PREMIUM = "PREMIUM"
    GRADE_A = "GRADE_A"
    GRADE_B = "GRADE_B"
    STANDARD = "STANDARD"


class ListingStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    SOLD = "SOLD"
    EXPIRED = "EXPIRED"


class MatchStatus(str, enum.Enum):
    SUGGESTED = "SUGGESTED"
    CONTACTED = "CONTACTED"
    NEGOTIATING = "NEGOTIATING"
    CONTRACT_SIGNED = "CONTRACT_SIGNED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class NegotiationStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class OfferStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    COUNTERED = "COUNTERED"
    EXPIRED = "EXPIRED"


class PaymentMethod(str, enum.Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"
    MOBILE_MONEY = "MOBILE_MONEY"
    PAPSS = "PAPSS"
    BANK_TRANSFER = "BANK_TRANSFER"
    MANUAL_PORT = "MANUAL_PORT"
    OTHER = "OTHER"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class DocumentType(str, enum.Enum):
    EXPORT_LICENSE = "EXPORT_LICENSE"
    IMPORT_PERMIT = "IMPORT_PERMIT"
    CERTIFICATE_OF_ORIGIN = "CERTIFICATE_OF_ORIGIN"
    PHYTOSANITARY_CERTIFICATE = "PHYTOSANITARY_CERTIFICATE"
    QUALITY_CERTIFICATE = "QUALITY_CERTIFICATE"
    ORGANIC_CERTIFICATION = "ORGANIC_CERTIFICATION"
    FAIR_TRADE_CERTIFICATION = "FAIR_TRADE_CERTIFICATION"
    COMMERCIAL_INVOICE = "COMMERCIAL_INVOICE"
    PACKING_LIST = "PACKING_LIST"
    BILL_OF_LADING = "BILL_OF_LADING"
    INSURANCE_CERTIFICATE = "INSURANCE_CERTIFICATE"
    TRADE_CONTRACT = "TRADE_CONTRACT"
    GEPA_LICENSE = "GEPA_LICENSE"
    CUSTOMS_DECLARATION = "CUSTOMS_DECLARATION"
    HEALTH_CERTIFICATE = "HEALTH_CERTIFICATE"
    OTHER = "OTHER"


class DocumentStatus(str, enum.Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class RelationshipStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"


class RelationshipType(str, enum.Enum):
    DIRECT = "DIRECT"
    COOPERATIVE = "COOPERATIVE"
    CONTRACT = "CONTRACT"
    PARTNERSHIP = "PARTNERSHIP"
