from enum import Enum


class CustomerStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class RuleType(str, Enum):
    percentage = "percentage"
    fixed_price = "fixed_price"
    fixed_discount = "fixed_discount"


class AppliesTo(str, Enum):
    all = "all"
    products = "products"
    collections = "collections"


class QuoteStatus(str, Enum):
    pending = "pending"
    responded = "responded"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"


class OrderApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
